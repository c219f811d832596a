import logging
from datetime import datetime

from quillmarket.extensions import db
from quillmarket.models.order import Order
from quillmarket.models.job import Job
from quillmarket.models.enums import OrderStatus, JobStatus, TransactionType, UserRole
from quillmarket.services.wallet_service import credit_balance
from quillmarket.utils.exceptions import NotFoundError, ForbiddenError, ConflictError
from quillmarket.utils.unit_of_work import atomic

logger = logging.getLogger(__name__)

ACTIVE_ORDER_STATUSES = (OrderStatus.IN_PROGRESS, OrderStatus.REVISION)


def get_order(order_id):
    order = db.session.get(Order, order_id)
    if not order:
        raise NotFoundError(message="Order not found")
    return order


def get_order_for(order_id, user):
    order = get_order(order_id)
    if user.role == UserRole.ADMIN or user.id in (order.client_id, order.writer_id):
        return order
    raise ForbiddenError(message="Not your order")


def orders_for_user(user):
    q = Order.query
    if user.role == UserRole.WRITER:
        q = q.filter(Order.writer_id == user.id)
    elif user.role == UserRole.CLIENT:
        q = q.filter(Order.client_id == user.id)
    elif user.role == UserRole.ADMIN:
        pass
    else:
        raise ForbiddenError()
    return q.order_by(Order.created_at.desc()).all()


def _transition(order, to_status, **values):
    """Move an active order to ``to_status``; fails if someone got there first."""
    updated = (
        Order.query
        .filter(Order.id == order.id, Order.status.in_(ACTIVE_ORDER_STATUSES))
        .update(
            {Order.status: to_status, **{getattr(Order, k): v for k, v in values.items()}},
            synchronize_session=False,
        )
    )
    if not updated:
        raise ConflictError(
            code="ORDER_NOT_ACTIVE",
            message="Order is already completed or cancelled"
        )


def complete_order(order_id, writer):
    """
    Writer marks an order complete: the job completes, the writer is paid the
    order amount and the payment is recorded in the ledger.
    """
    order = get_order(order_id)
    if order.writer_id != writer.id:
        raise ForbiddenError(message="Only the assigned writer can complete this order")

    now = datetime.utcnow()
    with atomic():
        _transition(order, OrderStatus.COMPLETED, completed_at=now)
        (
            Job.query
            .filter(Job.id == order.job_id)
            .update({Job.status: JobStatus.COMPLETED}, synchronize_session=False)
        )
        credit_balance(
            user_id=order.writer_id,
            amount=order.amount,
            tx_type=TransactionType.PAYMENT,
            status="completed",
            order_id=order.id,
        )

    logger.info("Order %s completed; writer %s credited %s", order.id, order.writer_id, order.amount)
    return order


def request_revision(order_id, client, notes):
    order = get_order(order_id)
    if order.client_id != client.id:
        raise ForbiddenError(message="Only the client on this order can request a revision")

    with atomic():
        _transition(order, OrderStatus.REVISION, revision_notes=notes)

    logger.info("Client %s requested revision on order %s", client.id, order.id)
    return order


def cancel_order(order_id, admin):
    order = get_order(order_id)
    if admin.role != UserRole.ADMIN:
        raise ForbiddenError(message="Admin privileges required")

    with atomic():
        _transition(order, OrderStatus.CANCELLED)
        (
            Job.query
            .filter(Job.id == order.job_id)
            .update({Job.status: JobStatus.CANCELLED}, synchronize_session=False)
        )

    logger.info("Admin %s cancelled order %s", admin.id, order.id)
    return order
