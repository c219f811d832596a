import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

from quillmarket.extensions import db
from quillmarket.models.bid import Bid
from quillmarket.models.job import Job
from quillmarket.models.order import Order
from quillmarket.models.enums import BidStatus, JobStatus, OrderStatus, UserRole
from quillmarket.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    InvalidOperationError,
    ConflictError,
)
from quillmarket.utils.unit_of_work import atomic

logger = logging.getLogger(__name__)


def get_bid(bid_id):
    bid = db.session.get(Bid, bid_id)
    if not bid:
        raise NotFoundError(message="Bid not found")
    return bid


def place_bid(writer, job_id, amount, delivery_time, cover_letter):
    if not writer.is_approved:
        logger.warning("Unapproved writer %s tried to bid on %s", writer.id, job_id)
        raise ForbiddenError(
            code="WRITER_NOT_APPROVED",
            message="Your account needs approval before bidding"
        )

    job = db.session.get(Job, job_id)
    if not job or job.status != JobStatus.OPEN:
        raise InvalidOperationError(code="JOB_NOT_OPEN", message="Job not available for bidding")

    # Prevent duplicate active bids
    existing = Bid.query.filter_by(
        job_id=job_id,
        writer_id=writer.id,
        status=BidStatus.PENDING
    ).first()

    if existing:
        raise InvalidOperationError(
            code="DUPLICATE_BID",
            message="You already have a pending bid on this job"
        )

    bid = Bid(
        job_id=job_id,
        writer_id=writer.id,
        amount=amount,
        delivery_time=delivery_time,
        cover_letter=cover_letter,
        status=BidStatus.PENDING,
    )

    db.session.add(bid)
    db.session.commit()
    logger.info("Writer %s bid %s on job %s", writer.id, bid.amount, job_id)
    return bid


def _owned_bid(bid_id, client):
    bid = get_bid(bid_id)
    if bid.job.client_id != client.id:
        raise ForbiddenError(message="Only the client who posted the job can manage its bids")
    if bid.status != BidStatus.PENDING:
        raise ConflictError(code="BID_NOT_PENDING", message="Bid already processed")
    return bid


def accept_bid(bid_id, client):
    """
    Accept a pending bid: the job moves to in_progress, an order is opened for
    the bidding writer and every other pending bid on the job is rejected.
    All of it lands in one transaction or not at all.
    """
    bid = _owned_bid(bid_id, client)
    job = bid.job
    now = datetime.utcnow()

    try:
        with atomic():
            claimed = (
                Job.query
                .filter(Job.id == job.id, Job.status == JobStatus.OPEN)
                .update({Job.status: JobStatus.IN_PROGRESS}, synchronize_session=False)
            )
            if not claimed:
                raise ConflictError(code="ALREADY_ASSIGNED", message="This job is no longer open")

            accepted = (
                Bid.query
                .filter(Bid.id == bid.id, Bid.status == BidStatus.PENDING)
                .update({Bid.status: BidStatus.ACCEPTED}, synchronize_session=False)
            )
            if not accepted:
                raise ConflictError(code="BID_NOT_PENDING", message="Bid already processed")

            order = Order(
                job_id=job.id,
                bid_id=bid.id,
                client_id=job.client_id,
                writer_id=bid.writer_id,
                amount=bid.amount,
                deadline=now + timedelta(days=bid.delivery_time),
                status=OrderStatus.IN_PROGRESS,
                created_at=now,
            )
            db.session.add(order)

            # Reject all other bids
            (
                Bid.query
                .filter(Bid.job_id == job.id, Bid.id != bid.id, Bid.status == BidStatus.PENDING)
                .update({Bid.status: BidStatus.REJECTED}, synchronize_session=False)
            )
    except IntegrityError:
        logger.warning("Concurrent acceptance detected for job %s", job.id)
        raise ConflictError(code="ALREADY_ASSIGNED", message="This job already has an order")

    logger.info("Client %s accepted bid %s; order %s opened", client.id, bid.id, order.id)
    return order


def reject_bid(bid_id, client):
    bid = _owned_bid(bid_id, client)
    with atomic():
        updated = (
            Bid.query
            .filter(Bid.id == bid.id, Bid.status == BidStatus.PENDING)
            .update({Bid.status: BidStatus.REJECTED}, synchronize_session=False)
        )
        if not updated:
            raise ConflictError(code="BID_NOT_PENDING", message="Bid already processed")
    logger.info("Client %s rejected bid %s", client.id, bid.id)
    return bid


def bids_for_user(user):
    """Writers see their own bids, clients the bids on their jobs, admins all bids."""
    q = Bid.query
    if user.role == UserRole.WRITER:
        q = q.filter(Bid.writer_id == user.id)
    elif user.role == UserRole.CLIENT:
        q = q.join(Job, Job.id == Bid.job_id).filter(Job.client_id == user.id)
    elif user.role == UserRole.ADMIN:
        pass
    else:
        raise ForbiddenError()
    return q.order_by(Bid.created_at.desc()).all()


def bids_for_job(job, viewer):
    if viewer.role == UserRole.CLIENT and job.client_id != viewer.id:
        raise ForbiddenError()
    return (
        Bid.query
        .filter(Bid.job_id == job.id)
        .order_by(Bid.created_at.desc())
        .all()
    )
