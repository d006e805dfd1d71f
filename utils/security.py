"""
security helpers:
- Argon2i password hashing via argon2-cffi, tuned so every encoded hash
  has the length the author table stores
- activation token generation
"""
from __future__ import annotations

import secrets
from typing import Any, Mapping

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from flask import current_app

# 16-byte salt and 32-byte digest encode to 22 and 43 base64 characters
SALT_LEN = 16
HASH_LEN = 32
ACTIVATION_TOKEN_BYTES = 16


def build_password_hasher(config: Mapping[str, Any]) -> PasswordHasher:
    """Argon2i hasher from the ARGON2_* config keys."""
    return PasswordHasher(
        time_cost=config["ARGON2_TIME_COST"],
        memory_cost=config["ARGON2_MEMORY_COST"],
        parallelism=config["ARGON2_PARALLELISM"],
        hash_len=HASH_LEN,
        salt_len=SALT_LEN,
        type=Type.I,
    )


def _hasher() -> PasswordHasher:
    return current_app.extensions["password_hasher"]


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2i
    """
    return _hasher().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return _hasher().verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_activation_token() -> str:
    """32 lower-case hex characters."""
    return secrets.token_hex(ACTIVATION_TOKEN_BYTES)
