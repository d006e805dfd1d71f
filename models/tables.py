"""
Table definitions for the author registry.

The repository builds its Core statements from this table, so the column
names here are also the bind parameter names.
"""
from sqlalchemy import BINARY, CHAR, Column, MetaData, String, Table

metadata = MetaData()

author = Table(
    "author",
    metadata,
    Column("authorId", BINARY(16), primary_key=True),
    Column("authorAvatarUrl", String(255), nullable=False),
    # NULL once the author has activated
    Column("authorActivationToken", CHAR(32), nullable=True),
    Column("authorEmail", String(128), nullable=False, unique=True, index=True),
    Column("authorHash", CHAR(97), nullable=False),
    Column("authorUsername", String(32), nullable=False, index=True),
)
