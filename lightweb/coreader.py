"""Asynchronous buffered readers over byte sources."""

import abc

from .errors import InvalidArgument, ResourceExhausted

DEFAULT_READ_BLOCK_SIZE = 1024 * 10
DEFAULT_MAXIMUM_READ_BUFFER_SIZE = 1024 * 1024 * 1024


def _as_pattern(delimiter):
    if isinstance(delimiter, int):
        pattern = bytes([delimiter])
    elif isinstance(delimiter, str):
        pattern = delimiter.encode()
    else:
        pattern = bytes(delimiter)
    if not pattern:
        raise InvalidArgument("Cannot read until an empty delimiter.")
    return pattern


class CoReadable(abc.ABC):
    """A source of bytes that can be read asynchronously."""

    @abc.abstractmethod
    def eof(self):
        """True once the source has nothing more to give."""

    @abc.abstractmethod
    def good(self):
        """True while the source may still produce data."""

    @abc.abstractmethod
    async def read(self, size):
        """Read and return at most ``size`` bytes."""


class BaseCoReader(abc.ABC):
    """Interface of readers that can read sized chunks or up to a delimiter."""

    @abc.abstractmethod
    def eof(self):
        """True once no buffered data remains and the source is exhausted."""

    @abc.abstractmethod
    def good(self):
        """True while data is buffered or the source may produce more."""

    @abc.abstractmethod
    async def read(self, size):
        """Return at most ``size`` bytes."""

    @abc.abstractmethod
    async def read_until(self, delimiter, limit=None):
        """Return bytes up to and including ``delimiter``."""


class CoReader(BaseCoReader):
    """Buffers a :class:`CoReadable` source for delimited and sized reads."""

    def __init__(
        self,
        source,
        block_size=DEFAULT_READ_BLOCK_SIZE,
        maximum_buffer_size=DEFAULT_MAXIMUM_READ_BUFFER_SIZE,
    ):
        self._source = source
        self._block_size = block_size
        self._maximum_buffer_size = maximum_buffer_size
        self._window = bytearray()

    def eof(self):
        return not self._window and self._source.eof()

    def good(self):
        return bool(self._window) or self._source.good()

    async def read(self, size):
        """Return up to ``size`` bytes, loading from the source at most once."""
        if len(self._window) < size:
            await self._load(size - len(self._window))
        return self._take(min(size, len(self._window)))

    async def read_until(self, delimiter, limit=None):
        """Return bytes through ``delimiter``, searching at most ``limit`` bytes.

        ``delimiter`` may be a byte value, a string or bytes. An empty result
        means the source ran out or the limit passed without a match; any
        buffered data is kept for later reads.
        """
        pattern = _as_pattern(delimiter)
        if not limit:
            limit = self._block_size
        matched = 0
        for position in range(limit):
            if position >= len(self._window):
                if not self.good():
                    return b""
                if not await self._load(limit - position):
                    return b""
            if self._window[position] == pattern[matched]:
                matched += 1
                if matched == len(pattern):
                    return self._take(position + 1)
            else:
                matched = 0
        return b""

    def _take(self, count):
        result = bytes(self._window[:count])
        del self._window[:count]
        return result

    async def _load(self, limit):
        desired = len(self._window) + limit
        if desired > self._maximum_buffer_size:
            raise ResourceExhausted(
                "CoReader buffer limited to maximum read buffer size "
                f"({self._maximum_buffer_size} bytes). {desired} bytes requested."
            )
        data = await self._source.read(limit)
        data = bytes(data)[:limit]
        self._window.extend(data)
        return len(data)


class CoStream(abc.ABC):
    """A duplex asynchronous byte stream."""

    @abc.abstractmethod
    def eof(self):
        """True once the stream has nothing more to read."""

    @abc.abstractmethod
    def good(self):
        """True while the stream may still produce data."""

    @abc.abstractmethod
    async def read(self, size):
        """Read and return at most ``size`` bytes."""

    @abc.abstractmethod
    async def write(self, data):
        """Write ``data`` and return the number of bytes written."""

    @abc.abstractmethod
    def close(self):
        """Close the stream."""