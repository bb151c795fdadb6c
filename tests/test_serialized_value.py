from dataclasses import dataclass

import pytest

from lightweb.serialized_value import (
    DeserializationParser,
    DeserializationToken,
    SerializedValue,
)
from lightweb.serializer import (
    Char,
    SerializationCategory,
    Unsigned,
    register_serializer,
)


class ValueToken(DeserializationToken):
    def __init__(self, value):
        self.value = value

    def __len__(self):
        return len(self.value)

    def is_null(self):
        return self.value is None

    def is_boolean(self):
        return isinstance(self.value, bool)

    def is_char(self):
        return isinstance(self.value, Char)

    def is_signed_integer(self):
        return isinstance(self.value, int) and not isinstance(self.value, (bool, Unsigned))

    def is_unsigned_integer(self):
        return isinstance(self.value, Unsigned)

    def is_floating_point(self):
        return isinstance(self.value, float)

    def is_string(self):
        return isinstance(self.value, str) and not isinstance(self.value, Char)

    def is_list(self):
        return isinstance(self.value, list)

    def is_object(self):
        return isinstance(self.value, dict)

    def get_boolean(self):
        return bool(self.value)

    def get_char(self):
        return str(self.value)

    def get_signed_integer(self):
        return int(self.value)

    def get_unsigned_integer(self):
        return int(self.value)

    def get_floating_point(self):
        return float(self.value)

    def get_string(self):
        return str(self.value)

    def has_index(self, index):
        return isinstance(self.value, list) and 0 <= index < len(self.value)

    def get_index(self, index):
        return ValueToken(self.value[index])

    def has_key(self, key):
        return isinstance(self.value, dict) and key in self.value

    def get_key(self, key):
        return ValueToken(self.value[key])


class ListParser(DeserializationParser):
    def parse(self, text):
        return ValueToken([int(part) for part in text.split(",")])


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Triple:
    a: int
    b: int
    c: int


@dataclass
class WriteOnly:
    v: int


register_serializer(
    Point,
    deserialize=lambda value: Point(value.get("x", int), value.get("y", int)),
    category=SerializationCategory.OBJECT,
)
register_serializer(
    Triple,
    deserialize=lambda value: Triple(value.get(0, int), value.get(1, int), value.get(2, int)),
    category=SerializationCategory.LIST,
)
register_serializer(WriteOnly, serialize=lambda s, v: s.write(v.v))


def test_deserialize_object_tagged():
    value = SerializedValue(ValueToken({"x": 3, "y": -4}))
    assert value.as_type(Point) == Point(3, -4)


def test_deserialize_list_tagged_through_parser():
    value = SerializedValue(ListParser().parse("1,2,3"))
    assert value.as_type(Triple) == Triple(1, 2, 3)


def test_get_by_key_and_index():
    value = SerializedValue(ValueToken({"name": "foo", "items": [1.5, True]}))
    assert value.get("name", str) == "foo"
    items = SerializedValue(ValueToken([1.5, True]))
    assert items.get(0, float) == 1.5
    assert items.get(1, bool) is True


def test_get_nested_registered_type():
    value = SerializedValue(ValueToken({"p": {"x": 1, "y": 2}}))
    assert value.get("p", Point) == Point(1, 2)


def test_get_default_when_missing():
    value = SerializedValue(ValueToken({"a": 1}))
    assert value.get("missing", int, 7) == 7
    assert value.get("a", int, 7) == 1
    items = SerializedValue(ValueToken([1]))
    assert items.get(5, int, 9) == 9


def test_get_missing_without_default_raises():
    value = SerializedValue(ValueToken({"a": 1}))
    with pytest.raises(KeyError):
        value.get("b", int)


def test_get_rejects_two_defaults():
    value = SerializedValue(ValueToken({"a": 1}))
    with pytest.raises(TypeError):
        value.get("a", int, 1, 2)


def test_has_distinguishes_index_and_key():
    obj = SerializedValue(ValueToken({"a": 1}))
    assert obj.has("a") is True
    assert obj.has("b") is False
    assert obj.has(0) is False
    lst = SerializedValue(ValueToken([10, 20]))
    assert lst.has(1) is True
    assert lst.has(2) is False


def test_type_predicates_forward_to_token():
    assert SerializedValue(ValueToken(None)).is_null() is True
    assert SerializedValue(ValueToken(True)).is_boolean() is True
    assert SerializedValue(ValueToken(Char("c"))).is_char() is True
    assert SerializedValue(ValueToken(-3)).is_signed_integer() is True
    assert SerializedValue(ValueToken(Unsigned(3))).is_unsigned_integer() is True
    assert SerializedValue(ValueToken(2.5)).is_floating_point() is True
    assert SerializedValue(ValueToken("s")).is_string() is True
    assert SerializedValue(ValueToken([])).is_list() is True
    assert SerializedValue(ValueToken({})).is_object() is True
    assert SerializedValue(ValueToken("s")).is_list() is False


def test_scalar_conversions():
    assert SerializedValue(ValueToken(None)).as_type(None) is None
    assert SerializedValue(ValueToken("x")).as_type(Char) == "x"
    unsigned = SerializedValue(ValueToken(Unsigned(42))).as_type(Unsigned)
    assert unsigned == 42
    assert isinstance(unsigned, Unsigned)
    assert SerializedValue(ValueToken(-5)).as_type(int) == -5


def test_unknown_type_raises():
    with pytest.raises(TypeError):
        SerializedValue(ValueToken(1)).as_type(complex)


def test_type_without_deserializer_raises():
    with pytest.raises(TypeError):
        SerializedValue(ValueToken(1)).as_type(WriteOnly)