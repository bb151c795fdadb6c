"""Typed access to parsed serialized data."""

import abc

from .serializer import Char, Unsigned, find_serializer


class DeserializationToken(abc.ABC):
    """A parsed value produced by a :class:`DeserializationParser`."""

    @abc.abstractmethod
    def __len__(self):
        """Number of elements in a list or object."""

    @abc.abstractmethod
    def is_null(self):
        """True for a null value."""

    @abc.abstractmethod
    def is_boolean(self):
        """True for a boolean."""

    @abc.abstractmethod
    def is_char(self):
        """True for a single character."""

    @abc.abstractmethod
    def is_signed_integer(self):
        """True for a signed integer."""

    @abc.abstractmethod
    def is_unsigned_integer(self):
        """True for an unsigned integer."""

    @abc.abstractmethod
    def is_floating_point(self):
        """True for a floating point number."""

    @abc.abstractmethod
    def is_string(self):
        """True for a string."""

    @abc.abstractmethod
    def is_list(self):
        """True for a list."""

    @abc.abstractmethod
    def is_object(self):
        """True for an object."""

    @abc.abstractmethod
    def get_boolean(self):
        """The value as a boolean."""

    @abc.abstractmethod
    def get_char(self):
        """The value as a single character."""

    @abc.abstractmethod
    def get_signed_integer(self):
        """The value as a signed integer."""

    @abc.abstractmethod
    def get_unsigned_integer(self):
        """The value as an unsigned integer."""

    @abc.abstractmethod
    def get_floating_point(self):
        """The value as a floating point number."""

    @abc.abstractmethod
    def get_string(self):
        """The value as a string."""

    @abc.abstractmethod
    def has_index(self, index):
        """True if the list has an element at ``index``."""

    @abc.abstractmethod
    def get_index(self, index):
        """The token at ``index`` of a list."""

    @abc.abstractmethod
    def has_key(self, key):
        """True if the object has ``key``."""

    @abc.abstractmethod
    def get_key(self, key):
        """The token under ``key`` of an object."""


class DeserializationParser(abc.ABC):
    """Turns serialized text into a token tree."""

    @abc.abstractmethod
    def parse(self, text):
        """Parse ``text`` and return its root :class:`DeserializationToken`."""


def _is_index(key):
    return isinstance(key, int) and not isinstance(key, bool)


class SerializedValue:
    """Reads typed values out of a deserialization token."""

    __slots__ = ("_token",)

    def __init__(self, token):
        self._token = token

    @property
    def token(self):
        return self._token

    def has(self, key):
        """True if the list has index ``key`` or the object has key ``key``."""
        if _is_index(key):
            return self._token.has_index(key)
        return self._token.has_key(key)

    def is_null(self):
        return self._token.is_null()

    def is_boolean(self):
        return self._token.is_boolean()

    def is_char(self):
        return self._token.is_char()

    def is_signed_integer(self):
        return self._token.is_signed_integer()

    def is_unsigned_integer(self):
        return self._token.is_unsigned_integer()

    def is_floating_point(self):
        return self._token.is_floating_point()

    def is_string(self):
        return self._token.is_string()

    def is_list(self):
        return self._token.is_list()

    def is_object(self):
        return self._token.is_object()

    def get(self, key, type_, *args):
        """Read the child at ``key`` (an index or a key) as ``type_``.

        An optional extra argument is a default returned when the child is
        missing.
        """
        if len(args) > 1:
            raise TypeError(f"get() takes at most one default, got {len(args)}.")
        if args and not self.has(key):
            return args[0]
        if _is_index(key):
            child = self._token.get_index(key)
        else:
            child = self._token.get_key(key)
        return SerializedValue(child).as_type(type_)

    def as_type(self, type_):
        """Read this value as ``type_``."""
        token = self._token
        if type_ is None or type_ is type(None):
            return None
        if type_ is bool:
            return token.get_boolean()
        if isinstance(type_, type):
            if issubclass(type_, Char):
                return type_(token.get_char())
            if issubclass(type_, Unsigned):
                return type_(token.get_unsigned_integer())
            if type_ is int:
                return token.get_signed_integer()
            if type_ is float:
                return token.get_floating_point()
            if type_ is str:
                return token.get_string()
        registration = find_serializer(type_)
        if registration is not None and registration.deserialize is not None:
            return registration.deserialize(self)
        name = getattr(type_, "__name__", repr(type_))
        raise TypeError(f"Cannot deserialize a value as {name}.")