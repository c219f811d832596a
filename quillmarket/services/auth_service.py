import logging

from quillmarket.extensions import db
from quillmarket.models.user import User
from quillmarket.models.enums import UserRole, ApprovalStatus
from quillmarket.utils.auth_utils import hash_password, check_password
from quillmarket.utils.exceptions import ServiceError, UnauthorizedError
from flask_jwt_extended import create_access_token
from datetime import timedelta
from flask import current_app

logger = logging.getLogger(__name__)


def register_user(username, email, password, full_name, role=UserRole.WRITER, bio=None, profile_image=None):
    if User.query.filter_by(username=username).first():
        raise ServiceError(
            code="USER_EXISTS",
            message="Username already exists",
            details={"field": "username"}
        )
    if User.query.filter_by(email=email).first():
        raise ServiceError(
            code="USER_EXISTS",
            message="User with that email already exists",
            details={"field": "email"}
        )

    # writers are vetted before they can bid
    approval = ApprovalStatus.PENDING if role == UserRole.WRITER else ApprovalStatus.APPROVED

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        role=role,
        bio=bio,
        profile_image=profile_image,
        approval_status=approval,
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered %s %s (%s)", role.value, user.username, user.id)
    return user


def authenticate_user(username, password):
    user = User.query.filter_by(username=username).first()
    if not user or not check_password(password, user.password_hash):
        logger.warning("Failed login for username %r", username)
        raise UnauthorizedError(code="AUTH_FAILED", message="Invalid credentials")
    return user


def generate_access_token(user):
    return create_access_token(
        identity=user.id,
        expires_delta=timedelta(seconds=current_app.config.get("ACCESS_EXPIRES", 86400)),
    )
