"""Byte buffers that can own or share their memory."""

from .errors import FailedPrecondition, InvalidArgument


def _check_trim(n, size):
    if n < 0 or n > size:
        raise InvalidArgument(
            f"Cannot trim {n} bytes from buffer with {size} bytes."
        )


def _byte_view(obj):
    view = memoryview(obj)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


class Buffer:
    """A mutable byte buffer.

    ``Buffer(n)`` allocates ``n`` zeroed bytes. A ``bytearray``, writable
    ``memoryview`` or another ``Buffer`` is wrapped without copying, so
    changes are visible through both. Any other bytes-like object or iterable
    of ints is copied.
    """

    __slots__ = ("_base", "_offset", "_view")

    def __init__(self, source=None):
        if isinstance(source, Buffer):
            self._base = source._base
            self._offset = source._offset
            self._view = source._view
            return
        if source is None:
            base = bytearray()
        elif isinstance(source, int):
            if source < 0:
                raise InvalidArgument(f"Cannot allocate {source} bytes.")
            base = bytearray(source)
        elif isinstance(source, bytearray):
            base = source
        elif isinstance(source, memoryview) and not source.readonly:
            base = source
        else:
            base = bytearray(source)
        self._base = base
        self._offset = 0
        self._view = _byte_view(base)

    @classmethod
    def _wrap(cls, base, offset, view):
        buffer = cls.__new__(cls)
        buffer._base = base
        buffer._offset = offset
        buffer._view = view
        return buffer

    def __len__(self):
        return len(self._view)

    def __getitem__(self, index):
        result = self._view[index]
        if isinstance(index, slice):
            return bytes(result)
        return result

    def __setitem__(self, index, value):
        self._view[index] = value

    def __iter__(self):
        return iter(self._view)

    def __eq__(self, other):
        if isinstance(other, Buffer):
            return self._view == other._view
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._view == other
        return NotImplemented

    __hash__ = None

    def __ixor__(self, other):
        """XOR ``min(len(self), len(other))`` bytes of ``other`` into this one."""
        mixed = bytes(a ^ b for a, b in zip(self._view, other))
        self._view[: len(mixed)] = mixed
        return self

    def __bytes__(self):
        return bytes(self._view)

    def __repr__(self):
        return f"{type(self).__name__}({bytes(self._view)!r})"

    def front(self):
        if not self._view:
            raise FailedPrecondition("Buffer does not contain any data.")
        return self._view[0]

    def back(self):
        if not self._view:
            raise FailedPrecondition("Buffer does not contain any data.")
        return self._view[-1]

    def trim_prefix(self, n):
        """Return a buffer sharing this memory, starting ``n`` bytes later."""
        _check_trim(n, len(self))
        return Buffer._wrap(self._base, self._offset + n, self._view[n:])

    def trim_suffix(self, n):
        """Return a buffer sharing this memory, ``n`` bytes shorter."""
        _check_trim(n, len(self))
        return Buffer._wrap(self._base, self._offset, self._view[: len(self) - n])

    def set_memory(self, value):
        """Set every byte of the buffer to ``value``."""
        self._view[:] = bytes([value]) * len(self)

    def copy_from(self, data, count=None):
        """Copy bytes from ``data`` into the start of the buffer.

        At most ``len(self)`` bytes are copied, and at most ``count`` if given.
        Returns the number of bytes copied.
        """
        limit = len(self) if count is None else min(count, len(self))
        if isinstance(data, (bytes, bytearray, memoryview, Buffer, BufferView)):
            chunk = bytes(data)[:limit]
        else:
            chunk = bytes(b for _, b in zip(range(limit), data))
        self._view[: len(chunk)] = chunk
        return len(chunk)


class BufferView:
    """A read-only view onto a buffer's memory.

    Two views are equal when they look at the same memory with the same size.
    """

    __slots__ = ("_base", "_offset", "_view")

    def __init__(self, buffer=None):
        if isinstance(buffer, (Buffer, BufferView)):
            self._base = buffer._base
            self._offset = buffer._offset
            self._view = buffer._view.toreadonly()
        elif buffer is None:
            self._base = None
            self._offset = 0
            self._view = memoryview(b"")
        else:
            self._base = buffer
            self._offset = 0
            self._view = _byte_view(buffer).toreadonly()

    @classmethod
    def _wrap(cls, base, offset, view):
        result = cls.__new__(cls)
        result._base = base
        result._offset = offset
        result._view = view
        return result

    def __len__(self):
        return len(self._view)

    def __getitem__(self, index):
        result = self._view[index]
        if isinstance(index, slice):
            return bytes(result)
        return result

    def __iter__(self):
        return iter(self._view)

    def __eq__(self, other):
        if not isinstance(other, BufferView):
            return NotImplemented
        return (
            self._base is other._base
            and self._offset == other._offset
            and len(self) == len(other)
        )

    def __hash__(self):
        return hash((id(self._base), self._offset, len(self)))

    def __bytes__(self):
        return bytes(self._view)

    def __repr__(self):
        return f"{type(self).__name__}({bytes(self._view)!r})"

    def front(self):
        if not self._view:
            raise FailedPrecondition("Buffer does not contain any data.")
        return self._view[0]

    def back(self):
        if not self._view:
            raise FailedPrecondition("Buffer does not contain any data.")
        return self._view[-1]

    def trim_prefix(self, n):
        _check_trim(n, len(self))
        return BufferView._wrap(self._base, self._offset + n, self._view[n:])

    def trim_suffix(self, n):
        _check_trim(n, len(self))
        return BufferView._wrap(
            self._base, self._offset, self._view[: len(self) - n]
        )