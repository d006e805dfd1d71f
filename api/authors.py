from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from models import storage
from models.author import Author
from models.author_repository import AuthorRepository
from models.exceptions import InvalidIdentifierError
from models.schemas.author import AuthorCreateSchema, AuthorUpdateSchema
from utils.security import generate_activation_token, hash_password, verify_password

bp = Blueprint("authors", __name__)

create_schema = AuthorCreateSchema()
update_schema = AuthorUpdateSchema()


def _repository() -> AuthorRepository:
    return AuthorRepository(storage.get_session())


def _get_or_404(repo: AuthorRepository, author_id: str) -> Author:
    try:
        author = repo.get_by_id(author_id)
    except InvalidIdentifierError:
        abort(404)
    if author is None:
        abort(404)
    return author


@bp.post("/authors")
def create_author():
    """
    Register an author
    ---
    tags: [Authors]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [authorEmail, authorUsername, password]
          properties:
            authorAvatarUrl: { type: string, maxLength: 255 }
            authorEmail: { type: string, maxLength: 128 }
            authorUsername: { type: string, maxLength: 32 }
            password: { type: string, minLength: 8 }
    responses:
      201: { description: Created }
      409: { description: Email already registered }
      422: { description: Validation error }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    author = Author.create(
        avatar_url=data["avatar_url"],
        activation_token=generate_activation_token(),
        email=data["email"],
        password_hash=hash_password(data["password"]),
        username=data["username"],
    )
    _repository().insert(author)
    storage.save()
    return jsonify({"data": author.json_serialize()}), 201


@bp.get("/authors")
def find_authors():
    """
    Look up authors by email (single) or by username (list)
    ---
    tags: [Authors]
    parameters:
      - in: query
        name: email
        type: string
      - in: query
        name: username
        type: string
    responses:
      200: { description: OK }
      400: { description: Neither email nor username given }
      404: { description: No author with that email }
    """
    repo = _repository()
    email = request.args.get("email")
    username = request.args.get("username")
    if email is not None:
        author = repo.get_by_email(email)
        if author is None:
            abort(404)
        return jsonify({"data": author.json_serialize()})
    if username is not None:
        authors = repo.get_by_username(username)
        return jsonify({"data": [a.json_serialize() for a in authors]})
    abort(400, description="email or username query parameter is required")


@bp.get("/authors/<author_id>")
def get_author(author_id: str):
    """
    Get an author by id
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: author_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    author = _get_or_404(_repository(), author_id)
    return jsonify({"data": author.json_serialize()})


@bp.patch("/authors/<author_id>")
def update_author(author_id: str):
    """
    Update an author (partial)
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: author_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            authorAvatarUrl: { type: string, maxLength: 255 }
            authorEmail: { type: string, maxLength: 128 }
            authorUsername: { type: string, maxLength: 32 }
            password: { type: string, minLength: 8 }
            currentPassword: { type: string, description: required with password }
    responses:
      200: { description: OK }
      403: { description: currentPassword missing or wrong }
      404: { description: Not found }
      409: { description: Email already registered }
      422: { description: Validation error }
    """
    repo = _repository()
    author = _get_or_404(repo, author_id)
    data = update_schema.load(request.get_json(silent=True) or {})
    if "avatar_url" in data:
        author.avatar_url = data["avatar_url"]
    if "email" in data:
        author.email = data["email"]
    if "username" in data:
        author.username = data["username"]
    if "password" in data:
        if not verify_password(data.get("current_password", ""), author.password_hash):
            abort(403, description="currentPassword is missing or incorrect")
        author.password_hash = hash_password(data["password"])
    repo.update(author)
    storage.save()
    return jsonify({"data": author.json_serialize()})


@bp.delete("/authors/<author_id>")
def delete_author(author_id: str):
    """
    Delete an author
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: author_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    repo = _repository()
    author = _get_or_404(repo, author_id)
    repo.delete(author)
    storage.save()
    return ("", 204)


@bp.post("/authors/activate/<activation_token>")
def activate_author(activation_token: str):
    """
    Consume an activation token and mark its author as activated
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: activation_token
        type: string
        required: true
    responses:
      200: { description: Activated }
      404: { description: No author holds this token }
      422: { description: Malformed token }
    """
    repo = _repository()
    author = repo.get_by_activation_token(activation_token)
    if author is None:
        abort(404)
    author.activate()
    repo.update(author)
    storage.save()
    return jsonify({"data": author.json_serialize()})
