from marshmallow import fields, validate, EXCLUDE

from quillmarket.extensions import ma
from quillmarket.models.enums import UserRole, ApprovalStatus


class RegisterSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True, validate=validate.Length(min=3, max=80))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6))
    email = fields.Email(required=True)
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    # admins are seeded, never self-registered
    role = fields.Enum(
        UserRole,
        by_value=True,
        load_default=UserRole.WRITER,
        validate=validate.OneOf([UserRole.WRITER, UserRole.CLIENT]),
    )
    bio = fields.String(load_default=None, allow_none=True)
    profile_image = fields.String(load_default=None, allow_none=True)


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True)
    password = fields.String(required=True, load_only=True)


class UserSchema(ma.Schema):
    id = fields.String()
    username = fields.String()
    email = fields.String()
    full_name = fields.String()
    role = fields.Enum(UserRole, by_value=True)
    bio = fields.String(allow_none=True)
    profile_image = fields.String(allow_none=True)
    balance = fields.Float()
    approval_status = fields.Enum(ApprovalStatus, by_value=True)
    created_at = fields.DateTime()


register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()
users_schema = UserSchema(many=True)
