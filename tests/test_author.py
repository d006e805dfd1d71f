import json
import uuid

import pytest

from conftest import ACTIVATION_TOKEN, ARGON2I_HASH, ARGON2ID_HASH
from models.author import Author
from models.exceptions import (
    AuthorValidationError,
    EmptyOrInvalidError,
    FormatError,
    InvalidIdentifierError,
    LengthError,
)


def test_constructor_stores_normalized_values(author_fields) -> None:
    author_id = author_fields["author_id"]
    author = Author(
        str(author_id),
        "  https://example.com/avatars/ada.png  ",
        " 0123456789ABCDEF0123456789ABCDEF ",
        "  ada@example.com ",
        f"{ARGON2I_HASH}\n",
        ' <em>"ada"</em> ',
    )
    assert author.author_id == author_id
    assert author.avatar_url == "https://example.com/avatars/ada.png"
    assert author.activation_token == ACTIVATION_TOKEN
    assert author.email == "ada@example.com"
    assert author.password_hash == ARGON2I_HASH
    assert author.username == "ada"


def test_create_generates_identifier() -> None:
    a = Author.create("", None, "a@example.com", ARGON2I_HASH, "a")
    b = Author.create("", None, "b@example.com", ARGON2I_HASH, "b")
    assert isinstance(a.author_id, uuid.UUID)
    assert a.author_id != b.author_id


@pytest.mark.parametrize(
    "field, value, error",
    [
        ("author_id", "nope", InvalidIdentifierError),
        ("avatar_url", "x" * 256, LengthError),
        ("activation_token", "xyz", FormatError),
        ("email", "not-an-email", EmptyOrInvalidError),
        ("password_hash", ARGON2ID_HASH, FormatError),
        ("username", "   ", EmptyOrInvalidError),
    ],
)
def test_construction_fails_on_any_invalid_field(author_fields, field, value, error) -> None:
    author_fields[field] = value
    with pytest.raises(error):
        Author(**author_fields)


def test_identifier_cannot_be_reassigned(make_author) -> None:
    author = make_author()
    with pytest.raises(AttributeError):
        author.author_id = uuid.uuid4()


def test_setter_revalidates_and_keeps_old_value_on_failure(make_author) -> None:
    author = make_author()
    with pytest.raises(LengthError):
        author.username = "u" * 33
    assert author.username == "ada"

    author.username = "  lovelace "
    assert author.username == "lovelace"


def test_validation_errors_name_the_column(make_author) -> None:
    author = make_author()
    with pytest.raises(AuthorValidationError) as exc_info:
        author.email = "bad"
    assert exc_info.value.normalized_messages() == {"authorEmail": ["email is invalid"]}


def test_activate_clears_token(make_author) -> None:
    author = make_author()
    assert not author.is_activated
    author.activate()
    assert author.activation_token is None
    assert author.is_activated


def test_activation_token_can_be_reset_to_none(make_author) -> None:
    author = make_author()
    author.activation_token = None
    assert author.activation_token is None


def test_json_projection_omits_secrets(make_author) -> None:
    author = make_author()
    data = author.json_serialize()
    assert data == {
        "authorId": str(author.author_id),
        "authorAvatarUrl": "https://example.com/avatars/ada.png",
        "authorEmail": "ada@example.com",
        "authorUsername": "ada",
    }
    assert "authorActivationToken" not in data
    assert "authorHash" not in data
    # must be serializable as-is
    json.dumps(data)
    assert author.to_dict() == data


def test_equality_compares_all_fields(make_author, author_fields) -> None:
    first = Author(**author_fields)
    second = Author(**author_fields)
    assert first == second
    second.username = "someone"
    assert first != second
    assert make_author() != first
