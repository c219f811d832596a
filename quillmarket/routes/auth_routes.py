from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required, current_user, set_access_cookies, unset_jwt_cookies

from quillmarket.services.auth_service import register_user, authenticate_user, generate_access_token
from quillmarket.schemas.user_schema import register_schema, login_schema, user_schema
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("auth", __name__, url_prefix="/api")


def _session_response(user, status):
    access = generate_access_token(user)
    response, status = success_response({
        "user": user_schema.dump(user),
        "access_token": access,
    }, status=status)
    set_access_cookies(response, access)
    return response, status


@bp.route("/register", methods=["POST"])
def register():
    data = register_schema.load(request.get_json(silent=True) or {})
    user = register_user(**data)
    return _session_response(user, 201)


@bp.route("/login", methods=["POST"])
def login():
    data = login_schema.load(request.get_json(silent=True) or {})
    user = authenticate_user(data["username"], data["password"])
    current_app.logger.info("User %s logged in", user.id)
    return _session_response(user, 200)


@bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    response, status = success_response({"message": "Successfully logged out"})
    unset_jwt_cookies(response)
    return response, status


@bp.route("/user", methods=["GET"])
@jwt_required()
def me():
    return success_response({"user": user_schema.dump(current_user)})
