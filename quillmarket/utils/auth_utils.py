from functools import wraps

from flask_jwt_extended import current_user, verify_jwt_in_request

from quillmarket.extensions import bcrypt
from quillmarket.utils.response_formatter import error_response


def hash_password(password: str) -> str:
    return bcrypt.generate_password_hash(password).decode("utf-8")


def check_password(password, hashed_password):
    return bcrypt.check_password_hash(hashed_password, password)


def role_required(*roles):
    """Require a valid session whose user holds one of ``roles``."""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            if current_user.role not in roles:
                return error_response("FORBIDDEN", "Forbidden", status=403)
            return fn(*args, **kwargs)
        return decorator
    return wrapper
