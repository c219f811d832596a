from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user

from quillmarket.models.enums import UserRole
from quillmarket.services import job_service, bid_service
from quillmarket.services.stats_service import writer_stats
from quillmarket.schemas.job_schema import job_create_schema, job_schema, jobs_schema
from quillmarket.schemas.bid_schema import bid_schema
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")


def serialize_bid_with_writer(bid):
    """Bid plus who placed it and how busy they are, for the client's review."""
    data = bid_schema.dump(bid)
    stats = writer_stats(bid.writer_id)
    data.update({
        "writer_username": bid.writer.username if bid.writer else None,
        "writer_name": bid.writer.full_name if bid.writer else None,
        "stats": {
            "completed_orders": stats["completed_orders"],
            "active_orders": stats["active_orders"],
            "pending_bids": stats["pending_bids"],
        },
    })
    return data


# ------------------------------------------------------------
#  GET /jobs — List jobs, optionally by status
# ------------------------------------------------------------
@bp.route("", methods=["GET"])
@jwt_required()
def list_jobs():
    jobs = job_service.list_jobs(status=request.args.get("status")).all()
    return success_response({"jobs": jobs_schema.dump(jobs)})


# ------------------------------------------------------------
#  POST /jobs — Post a new job (clients only)
# ------------------------------------------------------------
@bp.route("", methods=["POST"])
@role_required(UserRole.CLIENT)
def create_job():
    data = job_create_schema.load(request.get_json(silent=True) or {})
    job = job_service.create_job(current_user, data)
    return success_response({"job": job_schema.dump(job)}, status=201)


@bp.route("/<job_id>", methods=["GET"])
@jwt_required()
def get_job(job_id):
    job = job_service.get_job(job_id)
    return success_response({"job": job_schema.dump(job)})


# ------------------------------------------------------------
#  POST /jobs/<job_id>/cancel — Cancel an open job
# ------------------------------------------------------------
@bp.route("/<job_id>/cancel", methods=["POST"])
@role_required(UserRole.CLIENT, UserRole.ADMIN)
def cancel_job(job_id):
    job = job_service.cancel_job(job_id, current_user)
    return success_response(
        {"job": job_schema.dump(job)},
        message="Job cancelled successfully"
    )


# ------------------------------------------------------------
#  GET /jobs/<job_id>/bids — Bids on a job with writer details
# ------------------------------------------------------------
@bp.route("/<job_id>/bids", methods=["GET"])
@role_required(UserRole.CLIENT, UserRole.ADMIN)
def list_job_bids(job_id):
    job = job_service.get_job(job_id)
    bids = bid_service.bids_for_job(job, current_user)
    return success_response({"bids": [serialize_bid_with_writer(b) for b in bids]})
