from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user

from quillmarket.models.enums import UserRole
from quillmarket.services import order_service
from quillmarket.schemas.order_schema import order_schema, revision_request_schema
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def serialize_order(order):
    """Order plus the job title and both parties' usernames."""
    data = order_schema.dump(order)
    data.update({
        "job_title": order.job.title if order.job else "Unknown Job",
        "client_username": order.client.username if order.client else "Unknown Client",
        "writer_username": order.writer.username if order.writer else "Unknown Writer",
    })
    return data


# ------------------------------------------------------------
#  GET /orders — Orders for the current user (admins see all)
# ------------------------------------------------------------
@bp.route("", methods=["GET"])
@jwt_required()
def list_orders():
    orders = order_service.orders_for_user(current_user)
    return success_response({"orders": [serialize_order(o) for o in orders]})


@bp.route("/<order_id>", methods=["GET"])
@jwt_required()
def get_order(order_id):
    order = order_service.get_order_for(order_id, current_user)
    return success_response({"order": serialize_order(order)})


# ------------------------------------------------------------
#  POST /orders/<order_id>/complete — Writer delivers, gets paid
# ------------------------------------------------------------
@bp.route("/<order_id>/complete", methods=["POST"])
@role_required(UserRole.WRITER)
def complete_order(order_id):
    order = order_service.complete_order(order_id, current_user)
    return success_response(
        {"order": serialize_order(order)},
        message=f"Order {order.id} marked as complete"
    )


# ------------------------------------------------------------
#  POST /orders/<order_id>/revision — Client asks for changes
# ------------------------------------------------------------
@bp.route("/<order_id>/revision", methods=["POST"])
@role_required(UserRole.CLIENT)
def request_revision(order_id):
    data = revision_request_schema.load(request.get_json(silent=True) or {})
    order = order_service.request_revision(order_id, current_user, data["notes"])
    return success_response(
        {"order": serialize_order(order)},
        message="Revision requested"
    )


@bp.route("/<order_id>/cancel", methods=["POST"])
@role_required(UserRole.ADMIN)
def cancel_order(order_id):
    order = order_service.cancel_order(order_id, current_user)
    return success_response(
        {"order": serialize_order(order)},
        message="Order cancelled successfully"
    )
