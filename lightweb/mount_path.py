"""Route patterns for HTTP endpoints and a trie for matching request paths."""

import abc
import enum
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import AlreadyExists, InvalidArgument
from .headers import Headers

SEP = "/"
_PARAM = ":"
_TYPE_START = "["
_TYPE_END = "]"
_FILE_EXT = "."
_ESCAPE = "\\"
_REGEX_PREFIX = ":[re]"
_DIGITS = frozenset("0123456789")


def _is_alnum(c):
    return c.isascii() and c.isalnum()


# --------------------------------------------------------------------------- #
# Matchers


class PathMatcher(abc.ABC):
    """Matches one ``/``-separated segment of a URL path."""

    @property
    @abc.abstractmethod
    def name(self):
        """The parameter name this matcher captures into."""

    @property
    @abc.abstractmethod
    def chunk(self):
        """The endpoint text this matcher was built from."""

    @abc.abstractmethod
    def is_literal(self):
        """True if the matcher captures nothing."""

    @abc.abstractmethod
    def match(self, url_part):
        """Return the captured value for ``url_part``, or None if it does not match."""

    def __repr__(self):
        return f"{type(self).__name__}({self.chunk!r})"


class LiteralPathMatcher(PathMatcher):
    """Matches a fixed segment, ignoring case."""

    def __init__(self, chunk):
        self._chunk = chunk

    @property
    def name(self):
        return self._chunk

    @property
    def chunk(self):
        return self._chunk

    def is_literal(self):
        return True

    def match(self, url_part):
        if self._chunk.lower() == url_part.lower():
            return url_part
        return None


class ParameterPathMatcher(PathMatcher):
    """Captures a whole segment, optionally requiring a file extension."""

    def __init__(self, chunk, name, extension=""):
        self._chunk = chunk
        self._name = name
        self._extension = extension

    @property
    def name(self):
        return self._name

    @property
    def chunk(self):
        return self._chunk

    @property
    def extension(self):
        return self._extension

    def is_literal(self):
        return False

    def match(self, url_part):
        extension = self._extension
        if not extension:
            return url_part
        if len(url_part) <= len(extension):
            return None
        stem, ending = url_part[: -len(extension)], url_part[-len(extension):]
        if ending.lower() != extension.lower():
            return None
        return stem


def _uint_validator(url_part):
    return all(c in _DIGITS for c in url_part)


def _int_validator(url_part):
    if url_part.startswith("-"):
        url_part = url_part[1:]
    return _uint_validator(url_part)


_VALIDATORS = {
    "int": _int_validator,
    "uint": _uint_validator,
}


class ValidatedParameterPathMatcher(ParameterPathMatcher):
    """A parameter whose captured value must pass a validator."""

    def __init__(self, chunk, name, extension, validator):
        super().__init__(chunk, name, extension)
        self._validator = validator

    @staticmethod
    def validator_for(type_name):
        """Return the validator for a parameter type such as ``int`` or ``uint``."""
        try:
            return _VALIDATORS[type_name]
        except KeyError:
            raise InvalidArgument(
                f"Unknown parameter validation type: {type_name}"
            ) from None

    def match(self, url_part):
        value = super().match(url_part)
        if value is not None and self._validator(value):
            return value
        return None


class RegexPathMatcher(PathMatcher):
    """Matches a segment against a case-insensitive regular expression.

    The capture is the first group if the expression has one, otherwise the
    whole segment. The parameter name is the matcher's position among unnamed
    parameters, starting at ``"1"``.
    """

    def __init__(self, index, chunk):
        self._name = str(index)
        self._chunk = chunk
        pattern = chunk[len(_REGEX_PREFIX):]
        try:
            self._regex = re.compile(pattern, re.IGNORECASE)
        except re.error as err:
            raise InvalidArgument(
                f"Invalid regular expression {pattern!r} in path: {err}"
            ) from None

    @property
    def name(self):
        return self._name

    @property
    def chunk(self):
        return self._chunk

    def is_literal(self):
        return False

    def match(self, url_part):
        found = self._regex.fullmatch(url_part)
        if found is None:
            return None
        if self._regex.groups == 0:
            return url_part
        return found.group(1) or ""


# --------------------------------------------------------------------------- #
# Parser


class _State(enum.Enum):
    START = enum.auto()
    LITERAL = enum.auto()
    PARAMETER_START = enum.auto()
    PARAMETER_TYPE = enum.auto()
    PARAMETER_NAME = enum.auto()
    PARAMETER_EXTENSION = enum.auto()
    PARAMETER_END = enum.auto()
    REGEX = enum.auto()


def _parameter_matcher(chunk, name, extension, type_name):
    if not type_name:
        return ParameterPathMatcher(chunk, name, extension)
    return ValidatedParameterPathMatcher(
        chunk,
        name,
        extension,
        ValidatedParameterPathMatcher.validator_for(type_name),
    )


def parse_into_matchers(endpoint):
    """Split an endpoint pattern into segment matchers.

    Supported segments: ``foo`` (literal), ``:name``, ``:name.ext``,
    ``:[int]name``, ``:[uint]name`` and ``:[re]<expression>``.

    Raises InvalidArgument for malformed patterns.
    """
    state = _State.START
    matchers = []
    size = len(endpoint)
    chunk_start = 0
    name_start = None
    extension_start = 0
    type_start = 0
    name = ""
    extension = ""
    type_name = ""
    escaping = False
    unnamed_counter = 0

    for i in range(size + 1):
        at_end = i == size
        c = "" if at_end else endpoint[i]

        if state is _State.PARAMETER_END:
            matchers.append(
                _parameter_matcher(
                    endpoint[chunk_start:i - 1], name, extension, type_name
                )
            )
            name_start = None
            state = _State.START

        if state is _State.START:
            if at_end or c == SEP:
                continue
            chunk_start = i
            if c == _PARAM:
                state = _State.PARAMETER_START
                name_start = None
                type_name = ""
            else:
                state = _State.LITERAL
            continue

        if state is _State.LITERAL:
            if at_end or c == SEP:
                matchers.append(LiteralPathMatcher(endpoint[chunk_start:i]))
                state = _State.START

        elif state is _State.PARAMETER_START:
            if at_end:
                raise InvalidArgument(
                    "Unexpected end of sequence after parameter start in "
                    f"endpoint {endpoint}"
                )
            if c == _TYPE_START:
                type_start = i + 1
                state = _State.PARAMETER_TYPE
                continue
            if not _is_alnum(c):
                raise InvalidArgument(
                    f"Unexpected character '{c}' at character {i} in endpoint "
                    f"{endpoint}. Expected either start of parameter type ([) "
                    "or alpha numeric parameter name."
                )
            name_start = i
            state = _State.PARAMETER_NAME

        elif state is _State.PARAMETER_TYPE:
            if at_end:
                raise InvalidArgument(
                    "Unexpected end of sequence in parameter type in endpoint "
                    f"{endpoint}"
                )
            if c == _TYPE_END:
                type_name = endpoint[type_start:i]
                if not type_name:
                    raise InvalidArgument(
                        f"Unexpected end of parameter type at character {i} "
                        f"in endpoint {endpoint}"
                    )
                if type_name == "re":
                    unnamed_counter += 1
                    state = _State.REGEX
                else:
                    state = _State.PARAMETER_NAME

        elif state is _State.PARAMETER_NAME:
            if name_start is None:
                name_start = i
            if at_end or c == _FILE_EXT or c == SEP:
                name = endpoint[name_start:i]
                if not name:
                    raise InvalidArgument(
                        f"Unexpected end of parameter name at character {i} "
                        f"in endpoint {endpoint}"
                    )
                if c == _FILE_EXT:
                    extension_start = i
                    state = _State.PARAMETER_EXTENSION
                else:
                    extension = ""
                    state = _State.PARAMETER_END
                continue
            if not _is_alnum(c):
                raise InvalidArgument(
                    f"Invalid character '{c}' at character {i} in endpoint "
                    f"{endpoint}. Parameter names must be alphanumeric."
                )

        elif state is _State.PARAMETER_EXTENSION:
            if at_end or c == SEP:
                extension = endpoint[extension_start:i]
                if len(extension) == 1:
                    raise InvalidArgument(
                        "Unexpected end of parameter file extension at "
                        f"character {i} in endpoint {endpoint}"
                    )
                state = _State.PARAMETER_END
                continue
            if c != _FILE_EXT and not _is_alnum(c):
                raise InvalidArgument(
                    f"Invalid character '{c}' at character {i} in endpoint "
                    f"{endpoint}. File extensions must be alphanumeric."
                )

        elif state is _State.REGEX:
            if escaping:
                escaping = False
                continue
            if c == _ESCAPE:
                escaping = True
            elif at_end or c == SEP:
                matchers.append(
                    RegexPathMatcher(unnamed_counter, endpoint[chunk_start:i])
                )
                state = _State.START

    if state is _State.PARAMETER_END:
        matchers.append(
            _parameter_matcher(endpoint[chunk_start:], name, extension, type_name)
        )

    return matchers


# --------------------------------------------------------------------------- #
# Mount paths


def _segments(url_path):
    """Yield each ``/``-separated segment with the index just past it."""
    start = 0
    for part in url_path.split(SEP):
        end = start + len(part)
        yield part, end
        start = end + 1


class MountPath:
    """A parsed endpoint pattern."""

    def __init__(self, matchers):
        self._matchers = list(matchers)

    @classmethod
    def parse_endpoint(cls, endpoint):
        return cls(parse_into_matchers(endpoint))

    @property
    def matchers(self):
        return tuple(self._matchers)

    def match(self, url_path):
        """Return the captured parameters if ``url_path`` matches, else None."""
        parameters = Headers()
        pending = iter(self._matchers)
        matcher = next(pending, None)
        consumed_to = 0
        for part, end in _segments(url_path):
            if matcher is None:
                break
            consumed_to = end + 1
            if not part:
                continue
            value = matcher.match(part)
            if value is None:
                return None
            if not matcher.is_literal():
                parameters[matcher.name] = value
            matcher = next(pending, None)

        if matcher is not None or consumed_to < len(url_path):
            return None
        return parameters


# --------------------------------------------------------------------------- #
# Endpoint trie


@dataclass
class _TrieNode:
    children: dict = field(default_factory=dict)
    wildcard: Optional[tuple] = None
    endpoint: Any = None


@dataclass
class MatchResult:
    """The endpoint a path matched and the parameters captured on the way."""

    parameters: Headers
    endpoint: Any


class EndpointTrie:
    """Maps request paths to endpoints.

    Endpoints are any objects with a ``route`` attribute holding their pattern.
    """

    def __init__(self):
        self._root = _TrieNode()

    def insert(self, mount_path, endpoint):
        """Mount ``endpoint`` at ``mount_path``.

        Raises AlreadyExists if the path collides with an existing one.
        """
        route = endpoint.route
        node = self._build_path(mount_path, route)
        if node.endpoint is not None:
            existing = node.endpoint.route
            if existing == route:
                raise AlreadyExists(f"A handler already exists for the route {route}")
            raise AlreadyExists(
                f"Handler route {route} collides with existing route {existing}"
            )
        node.endpoint = endpoint

    def match(self, url_path):
        """Return a :class:`MatchResult` for ``url_path``, or None."""
        found = self._walk_path(url_path)
        if found is None:
            return None
        parameters, node = found
        if node.endpoint is None:
            return None
        return MatchResult(parameters=parameters, endpoint=node.endpoint)

    def _build_path(self, mount_path, route):
        node = self._root
        for matcher in mount_path.matchers:
            node = self._build_literal_path(node, SEP)
            if matcher.is_literal():
                node = self._build_literal_path(node, matcher.chunk)
                continue
            if node.wildcard is None:
                node.wildcard = (matcher, _TrieNode())
            elif node.wildcard[0].chunk != matcher.chunk:
                raise AlreadyExists(
                    f"Path parameter {matcher.chunk} for route {route} collides "
                    f"with existing path parameter {node.wildcard[0].chunk}"
                )
            node = node.wildcard[1]
        return node

    @staticmethod
    def _build_literal_path(node, part):
        for c in part:
            node = node.children.setdefault(c, _TrieNode())
        return node

    def _walk_path(self, path):
        parameters = Headers()
        node = self._root
        wildcard_stack = []
        i = 0
        while i < len(path):
            if node.wildcard is not None:
                wildcard_stack.append((node, i))
            child = node.children.get(path[i])
            if child is not None:
                node = child
                i += 1
                continue

            # No literal match: fall back to the most recent wildcard.
            while wildcard_stack:
                wild_node, wild_i = wildcard_stack.pop()
                sep_pos = path.find(SEP, wild_i + 1)
                if sep_pos == -1:
                    sep_pos = len(path)
                matcher, matched_node = wild_node.wildcard
                value = matcher.match(path[wild_i:sep_pos])
                if value is not None:
                    parameters[matcher.name] = value
                    i = wild_i + len(value)
                    node = matched_node
                    break
            else:
                return None

        return parameters, node