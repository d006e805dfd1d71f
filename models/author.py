"""
Author record: identity fields of one registered author.

Every field is validated when the record is built and again whenever a
setter replaces it; a failed validation leaves the record untouched.
The identifier is fixed at construction and has no setter.
"""
from __future__ import annotations

import uuid

from models.schemas.author import AuthorOutSchema
from models.validators import (
    validate_activation_token,
    validate_avatar_url,
    validate_email,
    validate_password_hash,
    validate_username,
    validate_uuid,
)

_out_schema = AuthorOutSchema()


class Author:
    """
    In-memory author record.

    Persistence lives in AuthorRepository; this class only enforces the
    field rules and produces the public JSON view.
    """

    def __init__(self, author_id, avatar_url: str, activation_token: str | None,
                 email: str, password_hash: str, username: str):
        self._author_id = validate_uuid(author_id)
        self.avatar_url = avatar_url
        self.activation_token = activation_token
        self.email = email
        self.password_hash = password_hash
        self.username = username

    @classmethod
    def create(cls, avatar_url: str, activation_token: str | None, email: str,
               password_hash: str, username: str) -> "Author":
        """Build a new record with a freshly generated identifier."""
        return cls(uuid.uuid4(), avatar_url, activation_token, email, password_hash, username)

    @property
    def author_id(self) -> uuid.UUID:
        return self._author_id

    @property
    def avatar_url(self) -> str:
        return self._avatar_url

    @avatar_url.setter
    def avatar_url(self, value: str) -> None:
        self._avatar_url = validate_avatar_url(value)

    @property
    def activation_token(self) -> str | None:
        return self._activation_token

    @activation_token.setter
    def activation_token(self, value: str | None) -> None:
        self._activation_token = validate_activation_token(value)

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        self._email = validate_email(value)

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @password_hash.setter
    def password_hash(self, value: str) -> None:
        self._password_hash = validate_password_hash(value)

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self._username = validate_username(value)

    @property
    def is_activated(self) -> bool:
        return self._activation_token is None

    def activate(self) -> None:
        """Clear the one-time activation token."""
        self._activation_token = None

    def json_serialize(self) -> dict:
        """Public view of the record; never includes the token or the hash."""
        return _out_schema.dump(self)

    to_dict = json_serialize

    def __eq__(self, other) -> bool:
        if not isinstance(other, Author):
            return NotImplemented
        return (
            self._author_id == other._author_id
            and self._avatar_url == other._avatar_url
            and self._activation_token == other._activation_token
            and self._email == other._email
            and self._password_hash == other._password_hash
            and self._username == other._username
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"<Author {self._author_id} {self._username!r}>"

    def __str__(self) -> str:
        return f"[{self.__class__.__name__}] ({self._author_id}) {self.json_serialize()}"
