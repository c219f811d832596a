from flask import Blueprint, request
from flask_jwt_extended import current_user

from quillmarket.models.user import User
from quillmarket.models.job import Job
from quillmarket.models.order import Order
from quillmarket.models.enums import UserRole, ApprovalStatus
from quillmarket.services import approval_service
from quillmarket.schemas.user_schema import user_schema, users_schema
from quillmarket.schemas.job_schema import jobs_schema
from quillmarket.schemas.order_schema import orders_schema
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.pagination import paginate_query
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _page(query):
    return paginate_query(query, request.args.get("page", 1), request.args.get("limit", 50))


@bp.route("/users", methods=["GET"])
@role_required(UserRole.ADMIN)
def list_users():
    items, pagination = _page(User.query.order_by(User.created_at.desc()))
    return success_response({"users": users_schema.dump(items), "pagination": pagination})


@bp.route("/jobs", methods=["GET"])
@role_required(UserRole.ADMIN)
def list_jobs():
    items, pagination = _page(Job.query.order_by(Job.created_at.desc()))
    return success_response({"jobs": jobs_schema.dump(items), "pagination": pagination})


@bp.route("/orders", methods=["GET"])
@role_required(UserRole.ADMIN)
def list_orders():
    items, pagination = _page(Order.query.order_by(Order.created_at.desc()))
    return success_response({"orders": orders_schema.dump(items), "pagination": pagination})


# ------------------------------------------------------------
#  GET /admin/writers — Writers awaiting (or past) vetting
# ------------------------------------------------------------
@bp.route("/writers", methods=["GET"])
@role_required(UserRole.ADMIN)
def list_writers():
    writers = approval_service.list_writers(request.args.get("approval_status"))
    data = []
    for w in writers:
        quiz = approval_service.latest_quiz(w.id)
        entry = user_schema.dump(w)
        entry["quiz_score"] = quiz.score if quiz else None
        data.append(entry)
    return success_response({"writers": data})


@bp.route("/writers/<writer_id>/approve", methods=["POST"])
@bp.route("/users/<writer_id>/approve", methods=["POST"])
@role_required(UserRole.ADMIN)
def approve_writer(writer_id):
    writer = approval_service.set_writer_approval(writer_id, ApprovalStatus.APPROVED, current_user)
    return success_response({"user": user_schema.dump(writer)}, message="Writer approved")


@bp.route("/writers/<writer_id>/reject", methods=["POST"])
@bp.route("/users/<writer_id>/reject", methods=["POST"])
@role_required(UserRole.ADMIN)
def reject_writer(writer_id):
    writer = approval_service.set_writer_approval(writer_id, ApprovalStatus.REJECTED, current_user)
    return success_response({"user": user_schema.dump(writer)}, message="Writer rejected")
