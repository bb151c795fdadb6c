"""Canonical error types raised throughout the package."""


class Error(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(Error, ValueError):
    """A caller supplied a value that cannot be accepted."""


class FailedPrecondition(Error):
    """The object is not in a state that allows the requested operation."""


class ResourceExhausted(Error):
    """A fixed capacity or size limit has been reached."""


class NotFound(Error, LookupError):
    """A requested item does not exist."""


class AlreadyExists(Error):
    """An item being created collides with an existing one."""


class Internal(Error):
    """An unexpected internal condition was encountered."""