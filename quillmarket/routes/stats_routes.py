from flask import Blueprint, request
from flask_jwt_extended import current_user

from quillmarket.models.enums import UserRole
from quillmarket.services import stats_service
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("stats", __name__, url_prefix="/api/stats")


@bp.route("/writer", methods=["GET"])
@role_required(UserRole.WRITER)
def writer_stats():
    return success_response({"stats": stats_service.writer_stats(current_user.id)})


@bp.route("/client", methods=["GET"])
@role_required(UserRole.CLIENT)
def client_stats():
    return success_response({"stats": stats_service.client_stats(current_user.id)})


@bp.route("/admin", methods=["GET"])
@role_required(UserRole.ADMIN)
def admin_stats():
    return success_response({"stats": stats_service.admin_stats()})


@bp.route("/admin/charts", methods=["GET"])
@role_required(UserRole.ADMIN)
def admin_charts():
    # older dashboards send timeRange
    time_range = request.args.get("time_range") or request.args.get("timeRange") or "6m"
    return success_response(stats_service.admin_charts(time_range))
