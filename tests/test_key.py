import pytest

from tikvkit.codec import decode_bytes
from tikvkit.key import Bound, BoundKind, Key, KvPair, hex_repr, to_key


def test_key_from_various_sources_is_equal():
    from_str = Key("TiKV")
    assert from_str == Key(b"TiKV")
    assert from_str == Key(bytearray(b"TiKV"))
    assert from_str == Key(list(b"TiKV"))
    assert bytes(from_str) == b"TiKV"


def test_to_key_accepts_key_pair_and_bytes():
    key = Key(b"abc")
    assert to_key(key) is key
    assert to_key(b"abc") == key
    assert to_key(KvPair(key, b"v")) == key


def test_key_rejects_integers():
    with pytest.raises(TypeError):
        Key(5)


def test_empty_key():
    assert Key.EMPTY.is_empty()
    assert len(Key.EMPTY) == 0
    assert not Key(b"a").is_empty()


def test_key_ordering_is_bytewise():
    assert Key(b"001") < Key(b"010")
    assert Key(b"") < Key(b"\x00")
    assert sorted([Key(b"b"), Key(b"a"), Key(b"ab")]) == [Key(b"a"), Key(b"ab"), Key(b"b")]


def test_zero_terminated_and_with_zero():
    key = Key(b"k")
    assert not key.zero_terminated()
    assert not Key.EMPTY.zero_terminated()
    extended = key.with_zero()
    assert extended.zero_terminated()
    assert extended.data == b"k\x00"
    assert key < extended


def test_lower_bound_conversion():
    assert Key(b"a").into_lower_bound() == Bound.included(Key(b"a"))
    assert Key(b"a\x00").into_lower_bound() == Bound.excluded(Key(b"a"))


def test_upper_bound_conversion():
    assert Key(b"z").into_upper_bound() == Bound.excluded(Key(b"z"))
    assert Key(b"z\x00").into_upper_bound() == Bound.included(Key(b"z"))


def test_to_encoded_matches_codec_vector():
    assert Key(bytes([1, 2, 3])).to_encoded() == Key(bytes([1, 2, 3, 0, 0, 0, 0, 0, 250]))
    assert Key.EMPTY.to_encoded().data == bytes([0, 0, 0, 0, 0, 0, 0, 0, 247])


@pytest.mark.parametrize("raw", [b"", b"\x00", b"hello world", bytes(range(20))])
def test_to_encoded_round_trip(raw):
    assert decode_bytes(Key(raw).to_encoded().data) == raw


def test_hex_repr_uppercase():
    assert hex_repr(b"\x01\xab") == "01AB"
    assert hex_repr(b"") == ""


def test_key_repr_uses_hex():
    assert repr(Key(b"TiKV")) == f"Key({hex_repr(b'TiKV')})"


def test_bound_constructors():
    assert Bound.included(b"a").kind is BoundKind.INCLUDED
    assert Bound.excluded("a").key == Key(b"a")
    assert Bound.unbounded().key is None


def test_bound_validation():
    with pytest.raises(ValueError):
        Bound(BoundKind.INCLUDED)
    with pytest.raises(ValueError):
        Bound(BoundKind.UNBOUNDED, Key(b"a"))


def test_kvpair_from_tuple_matches_constructor():
    constructed = KvPair("key", "value")
    from_tuple = KvPair.from_tuple(("key", "value"))
    assert constructed == from_tuple
    assert constructed.key == Key(b"key")
    assert constructed.value == b"value"


def test_kvpair_unpacks():
    key, value = KvPair(b"k1", b"v1")
    assert key == Key(b"k1")
    assert value == b"v1"


def test_kvpair_repr_text_value():
    pair = KvPair(b"key", b"value")
    assert repr(pair) == f'KvPair({hex_repr(b"key")}, "value")'


def test_kvpair_repr_binary_value():
    pair = KvPair(b"key", b"\xff\xfe")
    assert repr(pair) == f"KvPair({hex_repr(b'key')}, {hex_repr(b'\xff\xfe')})"


def test_kvpair_repr_escapes_quotes():
    pair = KvPair(b"k", b'a"b')
    assert repr(pair).endswith('"a\\"b")')