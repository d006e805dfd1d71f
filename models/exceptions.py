"""
Error kinds raised by the Author record and its repository.

Field rejections subclass marshmallow's ValidationError so the API layer can
report them through the same 422 handler as schema errors.
"""
from marshmallow import ValidationError


class AuthorValidationError(ValidationError):
    """A field value was rejected; field_name holds the column name."""


class FormatError(AuthorValidationError):
    """Malformed hex token or password hash."""


class LengthError(AuthorValidationError):
    """Value is longer (or shorter) than the column allows."""


class EmptyOrInvalidError(AuthorValidationError):
    """Required value is blank after normalization, or not a valid email."""


class InvalidIdentifierError(AuthorValidationError, TypeError):
    """Value cannot be converted to a UUID."""


class StorageError(Exception):
    """A statement failed in the backing store.

    The original driver error is kept as ``__cause__`` and on ``orig``.
    """

    def __init__(self, message: str, orig: Exception | None = None):
        super().__init__(message)
        self.orig = orig
