"""
Field validators for the Author record.

Each validator takes the raw value, returns the normalized value that may be
stored, or raises one of the errors from models.exceptions.
"""
from __future__ import annotations

import re
import string
import uuid

from argon2 import Type, extract_parameters
from argon2.exceptions import InvalidHashError
from marshmallow import ValidationError
from marshmallow.validate import Email

from models.exceptions import (
    EmptyOrInvalidError,
    FormatError,
    InvalidIdentifierError,
    LengthError,
)

AVATAR_URL_MAX_LENGTH = 255
ACTIVATION_TOKEN_LENGTH = 32
EMAIL_MAX_LENGTH = 128
PASSWORD_HASH_LENGTH = 97
USERNAME_MAX_LENGTH = 32

_TAG_RE = re.compile(r"<[^>]*>?")
_STRIPPED_CHARS = {c: None for c in range(0x20)}
_STRIPPED_CHARS.update({0x7F: None, ord("'"): None, ord('"'): None})
_HEX_DIGITS = frozenset(string.hexdigits)

_email_validator = Email()


def _require_str(value, field_name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
    return value


def sanitize_string(value: str) -> str:
    """Strip markup tags, control characters and quotes."""
    value = _TAG_RE.sub("", value)
    return value.translate(_STRIPPED_CHARS)


def validate_uuid(value) -> uuid.UUID:
    """Accept a UUID, its canonical string form or its 16 raw bytes."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        if isinstance(value, str):
            return uuid.UUID(value.strip())
        if isinstance(value, (bytes, bytearray, memoryview)):
            return uuid.UUID(bytes=bytes(value))
    except ValueError:
        raise InvalidIdentifierError("authorId is not a valid UUID", field_name="authorId") from None
    raise InvalidIdentifierError(
        f"authorId must be a UUID, string or bytes, got {type(value).__name__}",
        field_name="authorId",
    )


def validate_avatar_url(value: str) -> str:
    value = sanitize_string(_require_str(value, "authorAvatarUrl").strip()).strip()
    if len(value) > AVATAR_URL_MAX_LENGTH:
        raise LengthError("avatar url is too large", field_name="authorAvatarUrl")
    return value


def validate_activation_token(value: str | None) -> str | None:
    # None means the author is already activated
    if value is None:
        return None
    value = _require_str(value, "authorActivationToken").strip().lower()
    if not value or not _HEX_DIGITS.issuperset(value):
        raise FormatError("activation token is not hexadecimal", field_name="authorActivationToken")
    if len(value) != ACTIVATION_TOKEN_LENGTH:
        raise LengthError(
            f"activation token must be {ACTIVATION_TOKEN_LENGTH} characters",
            field_name="authorActivationToken",
        )
    return value


def validate_email(value: str) -> str:
    value = _require_str(value, "authorEmail").strip()
    if not value:
        raise EmptyOrInvalidError("email is empty", field_name="authorEmail")
    try:
        _email_validator(value)
    except ValidationError:
        raise EmptyOrInvalidError("email is invalid", field_name="authorEmail") from None
    if len(value) > EMAIL_MAX_LENGTH:
        raise LengthError("email is too large", field_name="authorEmail")
    return value


def validate_password_hash(value: str) -> str:
    """Check that value is an encoded argon2i hash of the stored length.

    The hash is only parsed, never recomputed.
    """
    value = _require_str(value, "authorHash").strip()
    if not value:
        raise EmptyOrInvalidError("hash is empty", field_name="authorHash")
    try:
        parameters = extract_parameters(value)
    except InvalidHashError:
        raise FormatError("hash is not an argon2 encoded hash", field_name="authorHash") from None
    if parameters.type is not Type.I:
        raise FormatError("hash must use argon2i", field_name="authorHash")
    if len(value) != PASSWORD_HASH_LENGTH:
        raise LengthError(f"hash must be {PASSWORD_HASH_LENGTH} characters", field_name="authorHash")
    return value


def validate_username(value: str) -> str:
    value = sanitize_string(_require_str(value, "authorUsername").strip()).strip()
    if not value:
        raise EmptyOrInvalidError("username is empty", field_name="authorUsername")
    if len(value) > USERNAME_MAX_LENGTH:
        raise LengthError("username is too long", field_name="authorUsername")
    return value
