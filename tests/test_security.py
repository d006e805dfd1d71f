import string

from argon2 import Type, extract_parameters

from api.config import BaseConfig, TestingConfig
from models.validators import validate_password_hash
from utils.security import (
    build_password_hasher,
    generate_activation_token,
    hash_password,
    verify_password,
)


def test_hash_password_produces_storable_argon2i_hash(app) -> None:
    with app.app_context():
        hashed = hash_password("correct horse battery")
    assert len(hashed) == 97
    assert extract_parameters(hashed).type is Type.I
    assert validate_password_hash(hashed) == hashed


def test_verify_password(app) -> None:
    with app.app_context():
        hashed = hash_password("correct horse battery")
        assert verify_password("correct horse battery", hashed)
        assert not verify_password("wrong horse battery", hashed)
        assert not verify_password("anything", "not-a-hash")


def _costs(config) -> dict:
    return {key: getattr(config, key) for key in ("ARGON2_TIME_COST", "ARGON2_MEMORY_COST", "ARGON2_PARALLELISM")}


def test_default_parameters_encode_to_97_characters() -> None:
    hasher = build_password_hasher(_costs(BaseConfig))
    header = f"$argon2i$v=19$m={hasher.memory_cost},t={hasher.time_cost},p={hasher.parallelism}$"
    # salt and digest add 22 + 1 + 43 characters
    assert len(header) + 66 == 97
    assert hasher.type is Type.I


def test_testing_parameters_are_cheaper_but_same_length() -> None:
    hasher = build_password_hasher(_costs(TestingConfig))
    assert hasher.memory_cost < BaseConfig.ARGON2_MEMORY_COST
    header = f"$argon2i$v=19$m={hasher.memory_cost},t={hasher.time_cost},p={hasher.parallelism}$"
    assert len(header) + 66 == 97


def test_generate_activation_token_is_32_lowercase_hex() -> None:
    token = generate_activation_token()
    assert len(token) == 32
    assert set(token) <= set(string.hexdigits.lower())
    assert generate_activation_token() != token
