import pytest

from tikvkit.codec import CodecError, decode_bytes, encode_bytes, max_encoded_bytes_size

PAIRS = [
    (
        [],
        [0, 0, 0, 0, 0, 0, 0, 0, 247],
        [255, 255, 255, 255, 255, 255, 255, 255, 8],
    ),
    (
        [0],
        [0, 0, 0, 0, 0, 0, 0, 0, 248],
        [255, 255, 255, 255, 255, 255, 255, 255, 7],
    ),
    (
        [1, 2, 3],
        [1, 2, 3, 0, 0, 0, 0, 0, 250],
        [254, 253, 252, 255, 255, 255, 255, 255, 5],
    ),
    (
        [1, 2, 3, 0],
        [1, 2, 3, 0, 0, 0, 0, 0, 251],
        [254, 253, 252, 255, 255, 255, 255, 255, 4],
    ),
    (
        [1, 2, 3, 4, 5, 6, 7],
        [1, 2, 3, 4, 5, 6, 7, 0, 254],
        [254, 253, 252, 251, 250, 249, 248, 255, 1],
    ),
    (
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 255, 0, 0, 0, 0, 0, 0, 0, 0, 247],
        [255, 255, 255, 255, 255, 255, 255, 255, 0, 255, 255, 255, 255, 255, 255, 255, 255, 8],
    ),
    (
        [1, 2, 3, 4, 5, 6, 7, 8],
        [1, 2, 3, 4, 5, 6, 7, 8, 255, 0, 0, 0, 0, 0, 0, 0, 0, 247],
        [254, 253, 252, 251, 250, 249, 248, 247, 0, 255, 255, 255, 255, 255, 255, 255, 255, 8],
    ),
    (
        [1, 2, 3, 4, 5, 6, 7, 8, 9],
        [1, 2, 3, 4, 5, 6, 7, 8, 255, 9, 0, 0, 0, 0, 0, 0, 0, 248],
        [254, 253, 252, 251, 250, 249, 248, 247, 0, 246, 255, 255, 255, 255, 255, 255, 255, 7],
    ),
]


@pytest.mark.parametrize(("source", "asc", "desc"), PAIRS)
def test_enc_dec_bytes(source, asc, desc):
    source, asc, desc = bytes(source), bytes(asc), bytes(desc)
    assert encode_bytes(source) == asc
    assert encode_bytes(source, desc=True) == desc
    assert decode_bytes(asc) == source
    assert decode_bytes(desc, desc=True) == source


@pytest.mark.parametrize(("source", "asc", "desc"), PAIRS)
def test_encoded_size_within_maximum(source, asc, desc):
    assert len(encode_bytes(bytes(source))) <= max_encoded_bytes_size(len(source))


def test_decode_empty_is_empty():
    assert decode_bytes(b"") == b""


def test_decode_unexpected_eof():
    with pytest.raises(CodecError, match="unexpected EOF"):
        decode_bytes(bytes([1, 2, 3, 0, 0, 0, 0, 0]))


def test_decode_missing_final_group():
    with pytest.raises(CodecError, match="unexpected EOF"):
        decode_bytes(bytes([1, 2, 3, 4, 5, 6, 7, 8, 255]))


def test_decode_pad_size_too_large():
    with pytest.raises(CodecError, match="invalid key padding"):
        decode_bytes(bytes([0, 0, 0, 0, 0, 0, 0, 0, 200]))


def test_decode_wrong_padding_bytes():
    with pytest.raises(CodecError, match="invalid key padding"):
        decode_bytes(bytes([1, 2, 3, 0, 0, 0, 0, 1, 250]))


def test_encoding_preserves_order():
    keys = [b"", b"\x00", b"\x01\x02", b"\x01\x02\x03\x04\x05\x06\x07\x08", b"\x01\x02\x03\x04\x05\x06\x07\x08\x00", b"\x02"]
    encoded = [encode_bytes(k) for k in keys]
    assert encoded == sorted(encoded)
    encoded_desc = [encode_bytes(k, desc=True) for k in keys]
    assert encoded_desc == sorted(encoded_desc, reverse=True)