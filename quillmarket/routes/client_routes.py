from flask import Blueprint
from flask_jwt_extended import current_user

from quillmarket.models.enums import UserRole
from quillmarket.services import job_service, bid_service, order_service, stats_service
from quillmarket.schemas.job_schema import jobs_schema
from quillmarket.routes.job_routes import serialize_bid_with_writer
from quillmarket.routes.order_routes import serialize_order
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("client", __name__, url_prefix="/api/client")


@bp.route("/jobs", methods=["GET"])
@role_required(UserRole.CLIENT)
def my_jobs():
    jobs = job_service.list_jobs(client_id=current_user.id).all()
    return success_response({"jobs": jobs_schema.dump(jobs)})


@bp.route("/orders", methods=["GET"])
@role_required(UserRole.CLIENT)
def my_orders():
    orders = order_service.orders_for_user(current_user)
    return success_response({"orders": [serialize_order(o) for o in orders]})


# ------------------------------------------------------------
#  GET /client/bids — Bids on the client's jobs, grouped by job
# ------------------------------------------------------------
@bp.route("/bids", methods=["GET"])
@role_required(UserRole.CLIENT)
def bids_by_job():
    grouped = {}
    for bid in bid_service.bids_for_user(current_user):
        grouped.setdefault(bid.job_id, []).append(serialize_bid_with_writer(bid))
    return success_response({"bids": grouped})


@bp.route("/stats", methods=["GET"])
@role_required(UserRole.CLIENT)
def my_stats():
    return success_response({"stats": stats_service.client_stats(current_user.id)})
