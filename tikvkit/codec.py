"""Memcomparable byte encoding used for MVCC keys."""

from __future__ import annotations

ENC_GROUP_SIZE = 8
ENC_MARKER = 0xFF
_ASC_PAD = 0x00
_DESC_PAD = 0xFF


class CodecError(ValueError):
    """Raised when encoded bytes cannot be decoded."""


def _invert(data: bytes) -> bytes:
    return bytes(b ^ 0xFF for b in data)


def max_encoded_bytes_size(n: int) -> int:
    """Return the maximum size of the encoding of ``n`` bytes."""
    return (n // ENC_GROUP_SIZE + 1) * (ENC_GROUP_SIZE + 1)


def encode_bytes(key: bytes, desc: bool = False) -> bytes:
    """Encode ``key`` in groups of eight bytes, each followed by a marker byte.

    The result sorts like the input under plain byte comparison (reversed when
    ``desc`` is true).
    """
    out = bytearray()
    length = len(key)
    for index in range(0, length + 1, ENC_GROUP_SIZE):
        remain = length - index
        pad = 0 if remain > ENC_GROUP_SIZE else ENC_GROUP_SIZE - remain
        group = bytes(key[index : index + ENC_GROUP_SIZE]) + bytes(pad) + bytes([ENC_MARKER - pad])
        out += _invert(group) if desc else group
    return bytes(out)


def decode_bytes(data: bytes, desc: bool = False) -> bytes:
    """Decode bytes produced by :func:`encode_bytes`; trailing data is ignored."""
    if not data:
        return b""
    padding_byte = _DESC_PAD if desc else _ASC_PAD
    out = bytearray()
    read_offset = 0
    while True:
        marker_offset = read_offset + ENC_GROUP_SIZE
        if marker_offset >= len(data):
            raise CodecError(f"unexpected EOF, original key = {list(data)!r}")
        out += data[read_offset:marker_offset]
        read_offset += ENC_GROUP_SIZE + 1

        marker = data[marker_offset]
        pad_size = marker if desc else ENC_MARKER - marker
        if pad_size > 0:
            if pad_size > ENC_GROUP_SIZE:
                raise CodecError("invalid key padding")
            if out[-pad_size:] != bytes([padding_byte]) * pad_size:
                raise CodecError("invalid key padding")
            del out[-pad_size:]
            return _invert(out) if desc else bytes(out)