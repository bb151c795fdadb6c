"""Type-aware serialization onto pluggable output formats."""

import abc
import enum
import inspect
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .errors import InvalidArgument

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


class SerializationCategory(enum.Enum):
    """How a registered type's output is framed by the serializer."""

    VALUE = "value"
    LIST = "list"
    OBJECT = "object"


class SerializationFormatter(abc.ABC):
    """Output format driven by a :class:`Serializer`."""

    @abc.abstractmethod
    def put_null(self):
        """Emit a null value."""

    @abc.abstractmethod
    def put_boolean(self, value):
        """Emit a boolean."""

    @abc.abstractmethod
    def put_char(self, value):
        """Emit a single character."""

    @abc.abstractmethod
    def put_signed_integer(self, number):
        """Emit a signed 64-bit integer."""

    @abc.abstractmethod
    def put_unsigned_integer(self, number):
        """Emit an unsigned 64-bit integer."""

    @abc.abstractmethod
    def put_floating_point(self, number):
        """Emit a floating point number."""

    @abc.abstractmethod
    def put_string(self, text):
        """Emit a string."""

    @abc.abstractmethod
    def start_list(self):
        """Begin a list."""

    @abc.abstractmethod
    def end_list(self):
        """End a list."""

    @abc.abstractmethod
    def start_object(self):
        """Begin an object."""

    @abc.abstractmethod
    def end_object(self):
        """End an object."""

    @abc.abstractmethod
    def start_pair_key(self):
        """Begin the key of a key-value pair."""

    @abc.abstractmethod
    def end_pair_key(self):
        """End the key of a key-value pair."""

    @abc.abstractmethod
    def end_pair(self):
        """End a key-value pair."""


class Char(str):
    """A string of exactly one character, serialized as a character."""

    def __new__(cls, value):
        text = str.__new__(cls, value)
        if len(text) != 1:
            raise InvalidArgument(
                f"Char must hold exactly one character, got {len(text)}."
            )
        return text


class Unsigned(int):
    """An integer serialized as an unsigned 64-bit value."""

    def __new__(cls, value=0):
        number = int.__new__(cls, value)
        if not 0 <= number <= _UINT64_MAX:
            raise InvalidArgument(
                f"{int(number)} is out of range for an unsigned integer."
            )
        return number


@dataclass(frozen=True)
class Registration:
    """How a type is serialized and deserialized."""

    serialize: object
    deserialize: object
    category: SerializationCategory
    is_async: bool


_REGISTRY = {}


def register_serializer(
    cls,
    serialize=None,
    deserialize=None,
    category=SerializationCategory.VALUE,
):
    """Register how instances of ``cls`` are written and read back.

    ``serialize(serializer, value)`` writes the value; it may be a coroutine
    function, in which case the type must be written with ``write_async``.
    ``deserialize(serialized_value)`` builds an instance.
    """
    if serialize is None and deserialize is None:
        raise InvalidArgument(
            f"A serializer or deserializer is required for {cls.__name__}."
        )
    registration = Registration(
        serialize=serialize,
        deserialize=deserialize,
        category=SerializationCategory(category),
        is_async=serialize is not None and inspect.iscoroutinefunction(serialize),
    )
    _REGISTRY[cls] = registration
    return registration


def find_serializer(cls):
    """Return the registration for ``cls`` or its nearest base, or None."""
    for klass in getattr(cls, "__mro__", (cls,)):
        registration = _REGISTRY.get(klass)
        if registration is not None:
            return registration
    return None


def _writer_registration(value):
    registration = find_serializer(type(value))
    if registration is None or registration.serialize is None:
        return None
    return registration


class Serializer:
    """Walks values by type and drives a formatter with them.

    ``write(value)`` writes one value; ``write(key, value)`` writes a
    key-value pair, for use inside object-category serialize functions.
    """

    def __init__(self, formatter):
        self._formatter = formatter

    @property
    def formatter(self):
        return self._formatter

    def write(self, *args):
        if len(args) == 2:
            self._write_pair(*args)
            return
        if len(args) != 1:
            raise TypeError(f"write() takes 1 or 2 values, got {len(args)}.")
        value = args[0]

        registration = _writer_registration(value)
        if registration is not None:
            if registration.is_async:
                raise TypeError(
                    f"{type(value).__name__} serializes asynchronously; "
                    "use write_async."
                )
            self._open(registration.category)
            registration.serialize(self, value)
            self._close(registration.category)
            return

        if self._write_scalar(value):
            return

        if isinstance(value, Mapping):
            self._formatter.start_object()
            for key, item in value.items():
                self._write_pair(key, item)
            self._formatter.end_object()
            return

        if isinstance(value, Iterable):
            self._formatter.start_list()
            for item in value:
                self.write(item)
            self._formatter.end_list()
            return

        raise TypeError(f"Cannot serialize value of type {type(value).__name__}.")

    async def write_async(self, *args):
        """Like :meth:`write`, awaiting asynchronous serialize functions."""
        if len(args) == 2:
            key, value = args
            self._formatter.start_pair_key()
            self.write(key)
            self._formatter.end_pair_key()
            await self.write_async(value)
            self._formatter.end_pair()
            return
        if len(args) != 1:
            raise TypeError(
                f"write_async() takes 1 or 2 values, got {len(args)}."
            )
        value = args[0]

        registration = _writer_registration(value)
        if registration is not None:
            self._open(registration.category)
            result = registration.serialize(self, value)
            if inspect.isawaitable(result):
                await result
            self._close(registration.category)
            return

        if self._write_scalar(value):
            return

        if isinstance(value, Mapping):
            self._formatter.start_object()
            for key, item in value.items():
                await self.write_async(key, item)
            self._formatter.end_object()
            return

        if isinstance(value, Iterable):
            self._formatter.start_list()
            for item in value:
                await self.write_async(item)
            self._formatter.end_list()
            return

        raise TypeError(f"Cannot serialize value of type {type(value).__name__}.")

    def _write_pair(self, key, value):
        self._formatter.start_pair_key()
        self.write(key)
        self._formatter.end_pair_key()
        self.write(value)
        self._formatter.end_pair()

    def _write_scalar(self, value):
        formatter = self._formatter
        if value is None:
            formatter.put_null()
        elif isinstance(value, bool):
            formatter.put_boolean(value)
        elif isinstance(value, Char):
            formatter.put_char(str(value))
        elif isinstance(value, Unsigned):
            formatter.put_unsigned_integer(int(value))
        elif isinstance(value, int):
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise InvalidArgument(
                    f"{value} is out of range for a signed integer."
                )
            formatter.put_signed_integer(value)
        elif isinstance(value, float):
            formatter.put_floating_point(value)
        elif isinstance(value, str):
            formatter.put_string(value)
        else:
            return False
        return True

    def _open(self, category):
        if category is SerializationCategory.LIST:
            self._formatter.start_list()
        elif category is SerializationCategory.OBJECT:
            self._formatter.start_object()

    def _close(self, category):
        if category is SerializationCategory.LIST:
            self._formatter.end_list()
        elif category is SerializationCategory.OBJECT:
            self._formatter.end_object()