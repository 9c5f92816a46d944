"""
Blog API — Status Table Tests
===============================

What:  The declarative exception → (status, code) mapping.
"""

import pytest

from blogapi.exceptions import (
    BlogError,
    DuplicateUserError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    StoreError,
    UnauthenticatedError,
    UserNotFoundError,
    ValidationError,
    resolve_status,
)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ValidationError("bad"), (400, "validation_error")),
        (DuplicateUserError("a@example.com"), (400, "duplicate_user")),
        (UserNotFoundError("a@example.com"), (400, "user_not_found")),
        (InvalidCredentialsError(), (400, "invalid_credentials")),
        (UnauthenticatedError(), (401, "unauthenticated")),
        (ForbiddenError(), (403, "forbidden")),
        (NotFoundError(resource_id=1), (404, "not_found")),
        (StoreError(detail="boom"), (500, "store_failure")),
        (BlogError(), (500, "server_error")),
    ],
)
def test_resolve_status(exc, expected):
    assert resolve_status(exc) == expected


def test_unlisted_subclass_inherits_parent_status():
    class ArchivedPostError(NotFoundError):
        pass

    assert resolve_status(ArchivedPostError()) == (404, "not_found")


def test_fixed_messages():
    assert UnauthenticatedError().message == "Access denied. No token provided."
    assert ForbiddenError(reason="expired").message == "Invalid token."
    assert DuplicateUserError().message == "User already exists"
    assert UserNotFoundError().message == "User not found"
    assert NotFoundError().message == "Blog post not found"
