from marshmallow import Schema, fields, validates, ValidationError

MIN_PASSWORD_LENGTH = 8


class AuthorCreateSchema(Schema):
    # Field rules proper are enforced by the Author record; this only shapes input
    avatar_url = fields.String(data_key="authorAvatarUrl", load_default="")
    email = fields.String(data_key="authorEmail", required=True)
    username = fields.String(data_key="authorUsername", required=True)
    password = fields.String(required=True, load_only=True)

    @validates("password")
    def validate_password(self, value, **kwargs):
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")


class AuthorUpdateSchema(Schema):
    avatar_url = fields.String(data_key="authorAvatarUrl")
    email = fields.String(data_key="authorEmail")
    username = fields.String(data_key="authorUsername")
    password = fields.String(load_only=True)
    current_password = fields.String(data_key="currentPassword", load_only=True)

    @validates("password")
    def validate_password(self, value, **kwargs):
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")


class AuthorOutSchema(Schema):
    """Public projection: the activation token and password hash are never dumped."""
    author_id = fields.UUID(data_key="authorId")
    avatar_url = fields.String(data_key="authorAvatarUrl")
    email = fields.String(data_key="authorEmail")
    username = fields.String(data_key="authorUsername")
