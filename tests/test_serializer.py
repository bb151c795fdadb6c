from dataclasses import dataclass

import pytest

from lightweb.errors import InvalidArgument
from lightweb.serializer import (
    Char,
    SerializationCategory,
    SerializationFormatter,
    Serializer,
    Unsigned,
    find_serializer,
    register_serializer,
)


class RecordingFormatter(SerializationFormatter):
    def __init__(self):
        self.calls = []

    def put_null(self):
        self.calls.append(("put_null",))

    def put_boolean(self, value):
        self.calls.append(("put_boolean", value))

    def put_char(self, value):
        self.calls.append(("put_char", value))

    def put_signed_integer(self, number):
        self.calls.append(("put_signed_integer", number))

    def put_unsigned_integer(self, number):
        self.calls.append(("put_unsigned_integer", number))

    def put_floating_point(self, number):
        self.calls.append(("put_floating_point", number))

    def put_string(self, text):
        self.calls.append(("put_string", text))

    def start_list(self):
        self.calls.append(("start_list",))

    def end_list(self):
        self.calls.append(("end_list",))

    def start_object(self):
        self.calls.append(("start_object",))

    def end_object(self):
        self.calls.append(("end_object",))

    def start_pair_key(self):
        self.calls.append(("start_pair_key",))

    def end_pair_key(self):
        self.calls.append(("end_pair_key",))

    def end_pair(self):
        self.calls.append(("end_pair",))


@dataclass
class ObjectTagged:
    a: int
    b: int
    c: int


@dataclass
class ListTagged:
    a: int
    b: int
    c: int


@dataclass
class AsyncListTagged:
    a: int
    b: int


def _serialize_object_tagged(serializer, value):
    serializer.write("a", value.a)
    serializer.write("b", value.b)
    serializer.write("c", value.c)


def _serialize_list_tagged(serializer, value):
    serializer.write(value.a)
    serializer.write(value.b)
    serializer.write(value.c)


async def _serialize_async_list_tagged(serializer, value):
    await serializer.write_async(value.a)
    await serializer.write_async(value.b)


register_serializer(
    ObjectTagged,
    serialize=_serialize_object_tagged,
    deserialize=lambda v: ObjectTagged(v.get("a", int), v.get("b", int), v.get("c", int)),
    category=SerializationCategory.OBJECT,
)
register_serializer(
    ListTagged,
    serialize=_serialize_list_tagged,
    deserialize=lambda v: ListTagged(v.get(0, int), v.get(1, int), v.get(2, int)),
    category=SerializationCategory.LIST,
)
register_serializer(
    AsyncListTagged,
    serialize=_serialize_async_list_tagged,
    category=SerializationCategory.LIST,
)


@pytest.fixture
def formatter():
    return RecordingFormatter()


def test_write_null(formatter):
    Serializer(formatter).write(None)
    assert formatter.calls == [("put_null",)]


def test_write_bool(formatter):
    s = Serializer(formatter)
    s.write(True)
    s.write(False)
    assert formatter.calls == [("put_boolean", True), ("put_boolean", False)]


def test_write_char(formatter):
    Serializer(formatter).write(Char("c"))
    assert formatter.calls == [("put_char", "c")]


def test_write_number(formatter):
    s = Serializer(formatter)
    s.write(-1)
    s.write(Unsigned(42))
    s.write(3.14)
    s.write(1.23)
    assert formatter.calls == [
        ("put_signed_integer", -1),
        ("put_unsigned_integer", 42),
        ("put_floating_point", 3.14),
        ("put_floating_point", 1.23),
    ]


def test_write_string(formatter):
    s = Serializer(formatter)
    s.write("foo")
    s.write("bar")
    s.write("bang")
    assert formatter.calls == [
        ("put_string", "foo"),
        ("put_string", "bar"),
        ("put_string", "bang"),
    ]


def test_write_list_number(formatter):
    Serializer(formatter).write([42, 42, 42])
    assert formatter.calls == [
        ("start_list",),
        ("put_signed_integer", 42),
        ("put_signed_integer", 42),
        ("put_signed_integer", 42),
        ("end_list",),
    ]


def test_write_list_string(formatter):
    Serializer(formatter).write(["foo", "foo", "foo"])
    assert formatter.calls.count(("put_string", "foo")) == 3
    assert formatter.calls[0] == ("start_list",)
    assert formatter.calls[-1] == ("end_list",)
    assert len(formatter.calls) == 5


def test_write_list_of_list(formatter):
    Serializer(formatter).write([["foo", "foo", "foo"], ["bar", "bar"]])
    assert formatter.calls.count(("put_string", "foo")) == 3
    assert formatter.calls.count(("put_string", "bar")) == 2
    assert formatter.calls.count(("start_list",)) == 3
    assert formatter.calls.count(("end_list",)) == 3
    assert formatter.calls[:2] == [("start_list",), ("start_list",)]


def test_write_list_tagged(formatter):
    Serializer(formatter).write(ListTagged(a=1, b=2, c=3))
    assert formatter.calls == [
        ("start_list",),
        ("put_signed_integer", 1),
        ("put_signed_integer", 2),
        ("put_signed_integer", 3),
        ("end_list",),
    ]


def test_write_object(formatter):
    Serializer(formatter).write({"foo": "bar", "fizz": "bang"})
    assert formatter.calls == [
        ("start_object",),
        ("start_pair_key",),
        ("put_string", "foo"),
        ("end_pair_key",),
        ("put_string", "bar"),
        ("end_pair",),
        ("start_pair_key",),
        ("put_string", "fizz"),
        ("end_pair_key",),
        ("put_string", "bang"),
        ("end_pair",),
        ("end_object",),
    ]


def test_write_object_tagged(formatter):
    Serializer(formatter).write(ObjectTagged(a=1, b=2, c=3))
    kinds = [call[0] for call in formatter.calls]
    assert kinds.count("put_string") == 3
    assert kinds.count("put_signed_integer") == 3
    assert kinds.count("start_pair_key") == 3
    assert kinds.count("end_pair_key") == 3
    assert kinds.count("end_pair") == 3
    assert formatter.calls[0] == ("start_object",)
    assert formatter.calls[-1] == ("end_object",)


def test_write_key_value_pair(formatter):
    Serializer(formatter).write("key", 5)
    assert formatter.calls == [
        ("start_pair_key",),
        ("put_string", "key"),
        ("end_pair_key",),
        ("put_signed_integer", 5),
        ("end_pair",),
    ]


def test_async_type_requires_write_async(formatter):
    with pytest.raises(TypeError):
        Serializer(formatter).write(AsyncListTagged(a=1, b=2))
    assert formatter.calls == []


@pytest.mark.asyncio
async def test_write_async_tagged(formatter):
    await Serializer(formatter).write_async(AsyncListTagged(a=7, b=8))
    assert formatter.calls == [
        ("start_list",),
        ("put_signed_integer", 7),
        ("put_signed_integer", 8),
        ("end_list",),
    ]


@pytest.mark.asyncio
async def test_write_async_pair_of_async_value(formatter):
    await Serializer(formatter).write_async("k", AsyncListTagged(a=1, b=2))
    assert formatter.calls == [
        ("start_pair_key",),
        ("put_string", "k"),
        ("end_pair_key",),
        ("start_list",),
        ("put_signed_integer", 1),
        ("put_signed_integer", 2),
        ("end_list",),
        ("end_pair",),
    ]


def test_unsupported_type_raises(formatter):
    with pytest.raises(TypeError):
        Serializer(formatter).write(object())


def test_signed_out_of_range_raises(formatter):
    with pytest.raises(InvalidArgument):
        Serializer(formatter).write(2**63)


def test_char_must_be_single_character():
    with pytest.raises(InvalidArgument):
        Char("ab")


def test_unsigned_rejects_negative():
    with pytest.raises(InvalidArgument):
        Unsigned(-1)


def test_find_serializer_walks_bases():
    class SubTagged(ListTagged):
        pass

    assert find_serializer(SubTagged) is find_serializer(ListTagged)
    assert find_serializer(SubTagged).category is SerializationCategory.LIST
    assert find_serializer(complex) is None


def test_register_requires_a_function():
    class Empty:
        pass

    with pytest.raises(InvalidArgument):
        register_serializer(Empty)