"""Growable text buffer that can be written to and read from."""


class StringBuffer:
    """Text that is appended by writes and consumed by reads.

    Writes always append to the end; reads advance a separate position from
    the start, so written text stays available through ``getvalue``.
    """

    def __init__(self, initial=""):
        self._data = initial
        self._pos = 0

    def write(self, text):
        """Append ``text`` and return the number of characters written."""
        self._data += text
        return len(text)

    def read(self, count=-1):
        """Consume and return up to ``count`` characters; all if negative."""
        end = len(self._data) if count < 0 else min(self._pos + count, len(self._data))
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_word(self):
        """Skip whitespace, then consume and return the next run of non-space."""
        data = self._data
        start = self._pos
        while start < len(data) and data[start].isspace():
            start += 1
        end = start
        while end < len(data) and not data[end].isspace():
            end += 1
        self._pos = end
        return data[start:end]

    def available(self):
        """Number of characters not yet read."""
        return len(self._data) - self._pos

    def getvalue(self):
        """The whole text written so far, read or not."""
        return self._data

    def __str__(self):
        return self._data