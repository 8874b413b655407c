"""Tests for the error taxonomy and its predicates."""

import pytest

from maasapi.errors import (
    BadRequestError,
    CannotCompleteError,
    DeserializationError,
    MAASError,
    NoMatchError,
    PermissionDeniedError,
    ServerError,
    UnexpectedError,
    UnsupportedVersionError,
    is_bad_request_error,
    is_cannot_complete_error,
    is_deserialization_error,
    is_no_match_error,
    is_permission_error,
    is_unexpected_error,
    is_unsupported_version_error,
    wrap_with_deserialization_error,
)


def test_wrap_with_deserialization_error():
    base = ValueError("base error")
    err = wrap_with_deserialization_error(base, "foo %d", 42)
    assert isinstance(err, DeserializationError)
    assert str(err) == "foo 42: base error"
    assert err.__cause__ is base


def test_wrap_without_arguments():
    err = wrap_with_deserialization_error(ValueError("boom"), "100%")
    assert str(err) == "100%: boom"


def test_unexpected_error():
    err = UnexpectedError(ValueError("wat"))
    assert str(err) == "unexpected: wat"
    assert is_unexpected_error(err)


def test_server_error():
    err = ServerError(405, "Method Not Allowed", "wat?")
    assert str(err) == "ServerError: 405 Method Not Allowed (wat?)"
    assert err.status_code == 405
    assert err.body_message == "wat?"


def test_annotate_keeps_kind_and_chains():
    err = DeserializationError("machine 2.0 schema check failed: boom")
    annotated = err.annotate("machine 1")
    assert type(annotated) is DeserializationError
    assert str(annotated) == "machine 1: machine 2.0 schema check failed: boom"
    assert annotated.__cause__ is err
    assert str(err) == "machine 2.0 schema check failed: boom"


def test_annotate_keeps_attributes():
    err = ServerError(404, "Not Found", "gone")
    annotated = err.annotate("zone 0")
    assert annotated.status_code == 404
    assert str(annotated) == "zone 0: ServerError: 404 Not Found (gone)"


@pytest.mark.parametrize("error, predicate", [
    (DeserializationError("x"), is_deserialization_error),
    (UnsupportedVersionError("x"), is_unsupported_version_error),
    (NoMatchError("x"), is_no_match_error),
    (BadRequestError("x"), is_bad_request_error),
    (PermissionDeniedError("x"), is_permission_error),
    (CannotCompleteError("x"), is_cannot_complete_error),
])
def test_predicates_match_their_kind(error, predicate):
    assert predicate(error)
    assert predicate(error.annotate("context"))
    assert isinstance(error, MAASError)


def test_predicates_distinguish_kinds():
    err = DeserializationError("x")
    assert not is_unsupported_version_error(err)
    assert not is_no_match_error(err)
    assert not is_deserialization_error(UnsupportedVersionError("x"))
    assert not is_deserialization_error(ValueError("x"))
    assert not is_deserialization_error(None)


def test_predicates_follow_cause_chain():
    inner = PermissionDeniedError("denied")
    outer = MAASError("unable to create authenticated client", cause=inner)
    assert is_permission_error(outer)
