import logging

from quillmarket.extensions import db
from quillmarket.models.job import Job
from quillmarket.models.bid import Bid
from quillmarket.models.enums import JobStatus, BidStatus, UserRole
from quillmarket.utils.exceptions import ServiceError, NotFoundError, ForbiddenError, InvalidOperationError
from quillmarket.utils.unit_of_work import atomic

logger = logging.getLogger(__name__)


def create_job(client, data):
    job = Job(
        client_id=client.id,
        title=data["title"],
        description=data["description"],
        category=data["category"],
        budget=data["budget"],
        deadline=data["deadline"],
        pages=data.get("pages"),
        attachments=data.get("attachments"),
        job_metadata={**data.get("metadata", {}), "reference_files": data.get("reference_files", [])},
        status=JobStatus.OPEN,
    )
    db.session.add(job)
    db.session.commit()
    logger.info("Client %s posted job %s", client.id, job.id)
    return job


def get_job(job_id):
    job = db.session.get(Job, job_id)
    if not job:
        raise NotFoundError(message="Job not found")
    return job


def list_jobs(status=None, client_id=None):
    q = Job.query
    if status:
        try:
            status = JobStatus(status)
        except ValueError:
            raise ServiceError(code="VALIDATION_ERROR", message=f"Unknown job status '{status}'")
        q = q.filter(Job.status == status)
    if client_id:
        q = q.filter(Job.client_id == client_id)
    return q.order_by(Job.created_at.desc())


def cancel_job(job_id, requester):
    """Cancel an open job and reject every pending bid on it."""
    job = get_job(job_id)

    is_owner = requester.role == UserRole.CLIENT and job.client_id == requester.id
    if not (is_owner or requester.role == UserRole.ADMIN):
        raise ForbiddenError(message="Only the client who posted the job can cancel it")

    with atomic():
        updated = (
            Job.query
            .filter(Job.id == job.id, Job.status == JobStatus.OPEN)
            .update({Job.status: JobStatus.CANCELLED}, synchronize_session=False)
        )
        if not updated:
            raise InvalidOperationError(code="JOB_NOT_OPEN", message="Only open jobs can be cancelled")

        rejected = (
            Bid.query
            .filter(Bid.job_id == job.id, Bid.status == BidStatus.PENDING)
            .update({Bid.status: BidStatus.REJECTED}, synchronize_session=False)
        )

    logger.info("Job %s cancelled by %s; %d pending bid(s) rejected", job.id, requester.id, rejected)
    return job
