from flask import Blueprint, request
from flask_jwt_extended import current_user

from quillmarket.models.enums import UserRole, JobStatus
from quillmarket.services import job_service, bid_service, order_service, stats_service, approval_service
from quillmarket.schemas.job_schema import jobs_schema
from quillmarket.schemas.bid_schema import bid_schema
from quillmarket.schemas.quiz_schema import writer_quiz_create_schema, writer_quiz_schema
from quillmarket.routes.order_routes import serialize_order
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("writer", __name__, url_prefix="/api")


# ------------------------------------------------------------
#  GET /writer/jobs — Open jobs a writer can bid on
# ------------------------------------------------------------
@bp.route("/writer/jobs", methods=["GET"])
@role_required(UserRole.WRITER)
def available_jobs():
    jobs = job_service.list_jobs(status=JobStatus.OPEN.value).all()
    return success_response({"jobs": jobs_schema.dump(jobs)})


@bp.route("/writer/bids", methods=["GET"])
@role_required(UserRole.WRITER)
def my_bids():
    data = []
    for bid in bid_service.bids_for_user(current_user):
        entry = bid_schema.dump(bid)
        entry.update({
            "job_title": bid.job.title if bid.job else "Unknown Job",
            "description": bid.job.description if bid.job else "",
            "deadline": bid.job.deadline if bid.job else None,
        })
        data.append(entry)
    return success_response({"bids": data})


@bp.route("/writer/orders", methods=["GET"])
@role_required(UserRole.WRITER)
def my_orders():
    orders = order_service.orders_for_user(current_user)
    return success_response({"orders": [serialize_order(o) for o in orders]})


@bp.route("/writer/stats", methods=["GET"])
@role_required(UserRole.WRITER)
def my_stats():
    return success_response({"stats": stats_service.writer_stats(current_user.id)})


# ------------------------------------------------------------
#  POST /writer-quiz — Submit the vetting quiz
# ------------------------------------------------------------
@bp.route("/writer-quiz", methods=["POST"])
@role_required(UserRole.WRITER)
def submit_quiz():
    data = writer_quiz_create_schema.load(request.get_json(silent=True) or {})
    quiz = approval_service.submit_writer_quiz(current_user, data["score"], data["answers"])
    return success_response({"quiz": writer_quiz_schema.dump(quiz)}, status=201)
