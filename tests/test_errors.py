import pytest

from lightweb.errors import (
    AlreadyExists,
    Error,
    FailedPrecondition,
    Internal,
    InvalidArgument,
    NotFound,
    ResourceExhausted,
)


@pytest.mark.parametrize(
    "error_type",
    [
        InvalidArgument,
        FailedPrecondition,
        ResourceExhausted,
        NotFound,
        AlreadyExists,
        Internal,
    ],
)
def test_errors_are_caught_as_base_error(error_type):
    err = error_type("something went wrong")
    assert str(err) == "something went wrong"
    assert err.args == ("something went wrong",)
    assert issubclass(error_type, Error)
    with pytest.raises(Error, match="something went wrong"):
        raise err


def test_invalid_argument_is_value_error():
    err = InvalidArgument("bad value")
    assert str(err) == "bad value"
    assert issubclass(InvalidArgument, ValueError)


def test_not_found_is_lookup_error():
    err = NotFound("missing")
    assert err.args == ("missing",)
    assert issubclass(NotFound, LookupError)


def test_distinct_error_types_do_not_overlap():
    err = ResourceExhausted("full")
    assert str(err) == "full"
    assert not issubclass(ResourceExhausted, FailedPrecondition)
    assert not issubclass(FailedPrecondition, ResourceExhausted)