import calendar
from datetime import datetime
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from flask import current_app
from sqlalchemy import func

from quillmarket.extensions import db
from quillmarket.models.user import User
from quillmarket.models.job import Job
from quillmarket.models.bid import Bid
from quillmarket.models.order import Order
from quillmarket.models.enums import (
    UserRole,
    ApprovalStatus,
    JobStatus,
    BidStatus,
    OrderStatus,
)
from quillmarket.utils.exceptions import NotFoundError, ServiceError

ACTIVE = (OrderStatus.IN_PROGRESS, OrderStatus.REVISION)
MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
TIME_RANGES = ("1m", "6m", "1y", "all")
ALL_TIME_START = datetime(2020, 1, 1)


def _count(query):
    return query.order_by(None).count()


def _money(value):
    return float(value or 0)


def writer_stats(writer_id):
    writer = db.session.get(User, writer_id)
    if not writer:
        raise NotFoundError(message="Writer not found")

    orders = Order.query.filter(Order.writer_id == writer_id)
    return {
        "balance": _money(writer.balance),
        "completed_orders": _count(orders.filter(Order.status == OrderStatus.COMPLETED)),
        "active_orders": _count(orders.filter(Order.status.in_(ACTIVE))),
        "pending_bids": _count(
            Bid.query.filter(Bid.writer_id == writer_id, Bid.status == BidStatus.PENDING)
        ),
    }


def client_stats(client_id):
    if not db.session.get(User, client_id):
        raise NotFoundError(message="Client not found")

    orders = Order.query.filter(Order.client_id == client_id)
    total_spent = (
        db.session.query(func.sum(Order.amount))
        .filter(Order.client_id == client_id, Order.status == OrderStatus.COMPLETED)
        .scalar()
    )
    return {
        "posted_jobs": _count(Job.query.filter(Job.client_id == client_id)),
        "active_orders": _count(orders.filter(Order.status.in_(ACTIVE))),
        "completed_orders": _count(orders.filter(Order.status == OrderStatus.COMPLETED)),
        "total_spent": _money(total_spent),
    }


def admin_stats():
    completed_total = (
        db.session.query(func.sum(Order.amount))
        .filter(Order.status == OrderStatus.COMPLETED)
        .scalar()
    ) or Decimal("0")
    rate = Decimal(str(current_app.config["PLATFORM_COMMISSION_RATE"]))

    return {
        "total_users": _count(User.query),
        "total_jobs": _count(Job.query),
        "total_orders": _count(Order.query),
        "total_revenue": round(_money(Decimal(completed_total) * rate), 2),
        "pending_writers": _count(
            User.query.filter(
                User.role == UserRole.WRITER,
                User.approval_status == ApprovalStatus.PENDING,
            )
        ),
    }


def _buckets(time_range, now):
    """Ordered bucket labels plus a function mapping a timestamp to its label."""
    if time_range == "1m":
        days = calendar.monthrange(now.year, now.month)[1]
        start = datetime(now.year, now.month, 1)
        labels = [str(d) for d in range(1, days + 1)]
        return start, labels, lambda dt: str(dt.day)

    if time_range == "6m":
        start = now - relativedelta(months=6)
    elif time_range == "1y":
        start = now - relativedelta(years=1)
    else:
        start = ALL_TIME_START

    labels = []
    cursor = datetime(start.year, start.month, 1)
    while cursor <= now:
        labels.append(f"{MONTH_NAMES[cursor.month - 1]} {cursor.year}")
        cursor += relativedelta(months=1)
    return start, labels, lambda dt: f"{MONTH_NAMES[dt.month - 1]} {dt.year}"


def admin_charts(time_range="6m", now=None):
    if time_range not in TIME_RANGES:
        raise ServiceError(
            code="VALIDATION_ERROR",
            message=f"time_range must be one of {', '.join(TIME_RANGES)}"
        )
    now = now or datetime.utcnow()
    start, labels, label_for = _buckets(time_range, now)

    series = {label: {"jobs": 0, "orders": 0, "revenue": 0.0} for label in labels}

    for (created_at,) in db.session.query(Job.created_at).filter(Job.created_at >= start):
        bucket = series.get(label_for(created_at))
        if bucket is not None:
            bucket["jobs"] += 1

    for created_at, amount in db.session.query(Order.created_at, Order.amount).filter(Order.created_at >= start):
        bucket = series.get(label_for(created_at))
        if bucket is not None:
            bucket["orders"] += 1
            bucket["revenue"] += _money(amount)

    # month-bucketed series are labelled by month name alone
    def display(label):
        return label if time_range == "1m" else label.split(" ")[0]

    status_counts = dict(
        db.session.query(Job.status, func.count(Job.id)).group_by(Job.status).all()
    )
    role_counts = dict(
        db.session.query(User.role, func.count(User.id)).group_by(User.role).all()
    )

    return {
        "job_data": [{"month": display(k), "jobs": v["jobs"]} for k, v in series.items()],
        "order_data": [{"month": display(k), "orders": v["orders"]} for k, v in series.items()],
        "revenue_data": [{"month": display(k), "revenue": round(v["revenue"], 2)} for k, v in series.items()],
        "status_data": [
            {"name": "Open", "value": status_counts.get(JobStatus.OPEN, 0)},
            {"name": "In Progress", "value": status_counts.get(JobStatus.IN_PROGRESS, 0)},
            {"name": "Completed", "value": status_counts.get(JobStatus.COMPLETED, 0)},
            {"name": "Cancelled", "value": status_counts.get(JobStatus.CANCELLED, 0)},
        ],
        "user_data": [
            {"name": "Writers", "value": role_counts.get(UserRole.WRITER, 0)},
            {"name": "Clients", "value": role_counts.get(UserRole.CLIENT, 0)},
            {"name": "Admins", "value": role_counts.get(UserRole.ADMIN, 0)},
        ],
    }
