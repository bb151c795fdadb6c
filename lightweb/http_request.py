"""Incoming HTTP requests read from a connection."""

import re

from .errors import FailedPrecondition, Internal, InvalidArgument, NotFound
from .headers import Headers

_SPACE = frozenset(" \t\n\v\f\r")
_LINE_END = frozenset("\r\n")
_HEADER_END = "\r\n\r\n"
_KEY_STOP = re.compile(r"[:\r\n]")
_INTEGER = re.compile(r"-?[0-9]+")
_INT64_MAX = 2**63 - 1


def parse_query_params(params):
    """Parse ``a=1&b&c=`` style parameters into a case-insensitive mapping.

    Parameters without ``=`` get an empty value, empty keys are skipped and
    the first occurrence of a repeated key wins.
    """
    result = Headers()
    for pair in params.split("&"):
        key, _, value = pair.partition("=")
        if key and key not in result:
            result[key] = value
    return result


def _scan_token(text, i, stop=""):
    """Return the index of the first whitespace or ``stop`` character from ``i``."""
    while i < len(text) and text[i] not in _SPACE and text[i] not in stop:
        i += 1
    return i


def _expect_space(text, i):
    if i >= len(text):
        raise InvalidArgument(
            f"Unexpected end of input at position {i}; expected space."
        )
    c = text[i]
    if c not in _SPACE or c in _LINE_END:
        raise InvalidArgument(
            f"Invalid character in request at position {i}. "
            f"Found 0x{ord(c):x}, expected space."
        )


def _parse_header_line(text):
    """Split one ``Key: value\\r\\n`` line off ``text``.

    Returns the key, the value and the text after the line.
    """
    stop = _KEY_STOP.search(text)
    if stop is None:
        raise InvalidArgument(f"Unexpected end of header at position {len(text)}")
    colon_pos = stop.start()
    if stop.group() != ":":
        raise InvalidArgument(
            f"Unexpected end of line at position {colon_pos}; expected ':'"
        )

    i = colon_pos + 1
    while i < len(text) and text[i] in _SPACE and text[i] not in _LINE_END:
        i += 1
    if i >= len(text):
        raise InvalidArgument(f"Unexpected end of header at position {i}")

    value_end = text.find("\r\n", i)
    if value_end == -1:
        raise InvalidArgument(f"Unexpected end of input at position {i}")
    return text[:colon_pos], text[i:value_end], text[value_end + 2:]


class HttpRequest:
    """An incoming HTTP request handled by this process as the server."""

    def __init__(self, connection):
        self._connection = connection
        self._raw_header = ""
        self._http_version = ""
        self._method = ""
        self._path = ""
        self._raw_path = ""
        self._headers = Headers()
        self._query_params = Headers()
        self._route_params = Headers()
        self._content_length = -1

    @property
    def http_version(self):
        return self._http_version

    @property
    def method(self):
        return self._method

    @property
    def raw_header(self):
        return self._raw_header

    @property
    def path(self):
        """The request path without its query string."""
        return self._path

    @property
    def raw_path(self):
        """The request path including its query string."""
        return self._raw_path

    @property
    def headers(self):
        return self._headers

    @property
    def query_params(self):
        return self._query_params

    @property
    def route_params(self):
        return self._route_params

    @route_params.setter
    def route_params(self, params):
        self._route_params = Headers(params)

    @property
    def content_length(self):
        return self._content_length

    def has_header(self, name):
        return name in self._headers

    def header(self, name):
        try:
            return self._headers[name]
        except KeyError:
            raise NotFound(f"Header {name} not found in request.") from None

    def has_query_param(self, name):
        return name in self._query_params

    def query_param(self, name):
        try:
            return self._query_params[name]
        except KeyError:
            raise NotFound(f"Query parameter {name} not found.") from None

    def has_route_param(self, name):
        return name in self._route_params

    def route_param(self, name):
        try:
            return self._route_params[name]
        except KeyError:
            raise NotFound(f"Route parameter {name} not found.") from None

    async def read_header(self):
        """Read the header from the connection and parse it.

        Raises FailedPrecondition if the header was already read and
        InvalidArgument if it is malformed.
        """
        if self._raw_header:
            raise FailedPrecondition("Header already loaded.")
        data = await self._connection.read_until(_HEADER_END)
        self._raw_header = bytes(data).decode("latin-1")

        method_line_end = self._parse_method_line(self._raw_header)
        self._parse_headers(self._raw_header[method_line_end:])
        self._parse_content_length()

    async def body(self):
        """Read the request body as bytes, as sized by Content-Length."""
        if self._content_length == 0:
            return b""
        if self._content_length > 0:
            return bytes(await self._connection.read(self._content_length))
        raise Internal(
            "Unsupported method of content body determination in request."
        )

    def _parse_method_line(self, text):
        i = _scan_token(text, 0)
        _expect_space(text, i)
        self._method = text[:i]

        i += 1
        start = i
        i = _scan_token(text, i, "?")
        end = i
        if i < len(text) and text[i] == "?":
            i = _scan_token(text, i)
            _expect_space(text, i)
            self._query_params = parse_query_params(text[end + 1:i])
        _expect_space(text, i)
        self._path = text[start:end]
        self._raw_path = text[start:i]

        i += 1
        start = i
        i = _scan_token(text, i)
        if i + 1 >= len(text):
            raise InvalidArgument("Unexpected end of input after HTTP method line.")
        if text[i:i + 2] != "\r\n":
            raise InvalidArgument(
                "Unexpected characters after HTTP version, expected \\r\\n."
            )
        self._http_version = text[start:i]
        return i + 2

    def _parse_headers(self, text):
        while not text.startswith("\r\n"):
            key, value, text = _parse_header_line(text)
            if key not in self._headers:
                self._headers[key] = value

    def _parse_content_length(self):
        if not self.has_header("content-length"):
            self._content_length = 0
            return
        text = self.header("content-length")
        length = int(text) if _INTEGER.fullmatch(text) else -1
        if length < 0 or length > _INT64_MAX:
            raise InvalidArgument(
                f'Invalid Content-Length "{text}"; expected a positive integer.'
            )
        self._content_length = length