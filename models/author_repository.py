"""
Data access for Author records.

AuthorRepository wraps a Session or Connection owned by the caller. It never
commits, rolls back or closes it; the caller decides the transaction scope.
Statements are built once at import time and executed with named parameters.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping

from sqlalchemy import bindparam, delete, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.author import Author
from models.exceptions import StorageError
from models.tables import author as author_table
from models.validators import (
    validate_activation_token,
    validate_email,
    validate_username,
    validate_uuid,
)

logger = logging.getLogger(__name__)

_c = author_table.c

INSERT_AUTHOR = insert(author_table)

# binds in an UPDATE may not reuse column names, hence the prefixes
UPDATE_AUTHOR = (
    update(author_table)
    .where(_c.authorId == bindparam("oldAuthorId"))
    .values(
        authorAvatarUrl=bindparam("newAuthorAvatarUrl"),
        authorActivationToken=bindparam("newAuthorActivationToken"),
        authorEmail=bindparam("newAuthorEmail"),
        authorHash=bindparam("newAuthorHash"),
        authorUsername=bindparam("newAuthorUsername"),
    )
)

DELETE_AUTHOR = delete(author_table).where(_c.authorId == bindparam("authorId"))

_SELECT_AUTHOR = select(
    _c.authorId,
    _c.authorAvatarUrl,
    _c.authorActivationToken,
    _c.authorEmail,
    _c.authorHash,
    _c.authorUsername,
)
SELECT_BY_ID = _SELECT_AUTHOR.where(_c.authorId == bindparam("authorId"))
SELECT_BY_ACTIVATION_TOKEN = _SELECT_AUTHOR.where(
    _c.authorActivationToken == bindparam("authorActivationToken")
)
SELECT_BY_EMAIL = _SELECT_AUTHOR.where(_c.authorEmail == bindparam("authorEmail"))
SELECT_BY_USERNAME = _SELECT_AUTHOR.where(_c.authorUsername == bindparam("authorUsername"))


def author_from_row(row: Mapping[str, Any]) -> Author:
    """Rebuild an Author from a result row, re-validating every column."""
    return Author(
        row["authorId"],
        row["authorAvatarUrl"],
        row["authorActivationToken"],
        row["authorEmail"],
        row["authorHash"],
        row["authorUsername"],
    )


class AuthorRepository:
    def __init__(self, bind: Session | Connection):
        self.bind = bind

    def _execute(self, statement, parameters: dict[str, Any], action: str):
        logger.debug("author %s", action)
        try:
            return self.bind.execute(statement, parameters)
        except SQLAlchemyError as exc:
            logger.warning("author %s failed: %s", action, exc)
            raise StorageError(f"author {action} failed", orig=exc) from exc

    def insert(self, author: Author) -> None:
        """Write all six fields as a new row."""
        self._execute(
            INSERT_AUTHOR,
            {
                "authorId": author.author_id.bytes,
                "authorAvatarUrl": author.avatar_url,
                "authorActivationToken": author.activation_token,
                "authorEmail": author.email,
                "authorHash": author.password_hash,
                "authorUsername": author.username,
            },
            "insert",
        )

    def update(self, author: Author) -> None:
        """
        Rewrite every non-identifier column of the row with this author's id.
        Matching no row is not an error.
        """
        self._execute(
            UPDATE_AUTHOR,
            {
                "oldAuthorId": author.author_id.bytes,
                "newAuthorAvatarUrl": author.avatar_url,
                "newAuthorActivationToken": author.activation_token,
                "newAuthorEmail": author.email,
                "newAuthorHash": author.password_hash,
                "newAuthorUsername": author.username,
            },
            "update",
        )

    def delete(self, author: Author) -> None:
        self._execute(DELETE_AUTHOR, {"authorId": author.author_id.bytes}, "delete")

    def get_by_id(self, author_id: uuid.UUID | str | bytes) -> Author | None:
        author_id = validate_uuid(author_id)
        result = self._execute(SELECT_BY_ID, {"authorId": author_id.bytes}, "lookup by id")
        row = result.mappings().first()
        return author_from_row(row) if row is not None else None

    def get_by_activation_token(self, activation_token: str) -> Author | None:
        """Find the author holding this token; malformed tokens raise before querying."""
        activation_token = validate_activation_token(activation_token)
        if activation_token is None:
            # None marks activated authors and never identifies one
            return None
        result = self._execute(
            SELECT_BY_ACTIVATION_TOKEN,
            {"authorActivationToken": activation_token},
            "lookup by activation token",
        )
        row = result.mappings().first()
        return author_from_row(row) if row is not None else None

    def get_by_email(self, email: str) -> Author | None:
        email = validate_email(email)
        result = self._execute(SELECT_BY_EMAIL, {"authorEmail": email}, "lookup by email")
        row = result.mappings().first()
        return author_from_row(row) if row is not None else None

    def get_by_username(self, username: str) -> list[Author]:
        username = validate_username(username)
        result = self._execute(SELECT_BY_USERNAME, {"authorUsername": username}, "lookup by username")
        return [author_from_row(row) for row in result.mappings()]
