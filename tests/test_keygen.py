import contextvars
import dataclasses
import enum

import pytest

from fcache.errors import EncodeError, KeyBuildError
from fcache.keygen import MAX_LEN, build_key, encode_value, hash_bytes


class Colour(enum.Enum):
    RED = 1
    BLUE = 2


@dataclasses.dataclass
class Point:
    x: int
    y: int


def test_none_key():
    assert build_key(None) == "nil"


def test_context_key():
    assert build_key(contextvars.copy_context()) == "context"


def test_int_key():
    assert build_key(42) == "42"
    assert build_key(-7) == "-7"


def test_bool_keys_differ_from_ints():
    assert build_key(True) == "b:true"
    assert build_key(False).startswith("b:")
    assert build_key(True) != build_key(1)


def test_float_keys():
    assert build_key(1.5) == "1.5"
    assert build_key(1e6) == "1e+06"


def test_string_key_has_prefix():
    text = "hello"
    assert build_key(text) == "s:" + text


def test_long_string_is_hashed():
    text = "x" * 200
    key = build_key(text)
    assert key == hash_bytes(("s:" + text).encode("utf-8"))
    assert len(key) == 64


def test_hash_bytes_known_vector():
    assert hash_bytes(b"abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_short_list_is_json():
    assert build_key([1, 2, 3]) == "[1,2,3]"


def test_dict_is_always_hashed_and_order_independent():
    first = build_key({"a": 1, "b": 2})
    second = build_key({"b": 2, "a": 1})
    assert first == second
    assert len(first) == 64
    assert first != build_key({"a": 1, "b": 3})


def test_large_dicts_produce_distinct_keys():
    maps = [{f"key_{i}_{j}": j for j in range(200)} for i in range(4)]
    keys = {build_key(m) for m in maps}
    assert len(keys) == 4


def test_enum_uses_string_form():
    assert build_key(Colour.RED) == "s:" + str(Colour.RED)
    assert build_key(Colour.RED) != build_key(Colour.BLUE)


def test_dataclass_is_deterministic():
    assert build_key(Point(1, 2)) == build_key(Point(1, 2))
    assert build_key(Point(1, 2)) != build_key(Point(2, 1))


def test_long_list_is_hashed():
    key = build_key(list(range(100)))
    assert len(key) == 64
    assert key == build_key(list(range(100)))


@pytest.mark.parametrize(
    "value",
    [None, 0, 3.25, "s", "y" * 500, [1, "a"], {"k": [1, 2]}, list(range(1000))],
)
def test_keys_never_exceed_limit(value):
    assert len(build_key(value).encode("utf-8")) <= MAX_LEN


def test_unserialisable_value_raises_key_build_error():
    with pytest.raises(KeyBuildError) as info:
        build_key(object())
    assert isinstance(info.value.__cause__, EncodeError)
    assert info.value.details["operation"] == "building cache key"


def test_nan_inside_collection_fails():
    with pytest.raises(KeyBuildError):
        build_key([float("nan")])


def test_encode_value_raises_encode_error():
    with pytest.raises(EncodeError) as info:
        encode_value([object()])
    assert info.value.message == "error marshalling to JSON"