import json
import logging
from decimal import Decimal

from quillmarket.extensions import db
from quillmarket.models.user import User
from quillmarket.models.transaction import Transaction
from quillmarket.models.enums import TransactionType
from quillmarket.utils.exceptions import NotFoundError, InsufficientBalanceError
from quillmarket.utils.unit_of_work import atomic

logger = logging.getLogger(__name__)


def credit_balance(user_id, amount, tx_type, status="completed", order_id=None,
                   payment_method=None, payment_details=None):
    """
    Atomically add ``amount`` to the user's balance and append the matching
    ledger entry. Does not commit; callers run it inside their unit of work.
    """
    amount = Decimal(amount)

    updated = (
        User.query
        .filter(User.id == user_id)
        .update({User.balance: User.balance + amount}, synchronize_session=False)
    )
    if not updated:
        raise NotFoundError(message="User not found")

    tx = Transaction(
        user_id=user_id,
        amount=amount,
        type=tx_type,
        status=status,
        order_id=order_id,
        payment_method=payment_method,
        payment_details=payment_details,
    )
    db.session.add(tx)
    return tx


def debit_balance(user_id, amount, tx_type, status="completed", order_id=None,
                  payment_method=None, payment_details=None):
    """
    Atomically subtract ``amount`` if the balance covers it; the ledger entry
    records the debit as a negative amount. Does not commit.
    """
    amount = Decimal(amount)

    updated = (
        User.query
        .filter(User.id == user_id, User.balance >= amount)
        .update({User.balance: User.balance - amount}, synchronize_session=False)
    )
    if not updated:
        raise InsufficientBalanceError(message="Insufficient balance")

    tx = Transaction(
        user_id=user_id,
        amount=-amount,
        type=tx_type,
        status=status,
        order_id=order_id,
        payment_method=payment_method,
        payment_details=payment_details,
    )
    db.session.add(tx)
    return tx


def request_withdrawal(user, amount, payment_method, payment_details):
    if not isinstance(payment_details, str):
        payment_details = json.dumps(payment_details)

    with atomic():
        tx = debit_balance(
            user_id=user.id,
            amount=amount,
            tx_type=TransactionType.WITHDRAWAL,
            status="pending",
            payment_method=payment_method,
            payment_details=payment_details,
        )

    logger.info("User %s requested withdrawal of %s via %s", user.id, amount, payment_method.value)
    return tx


def deposit(user_id, amount, payment_method=None):
    with atomic():
        tx = credit_balance(
            user_id=user_id,
            amount=amount,
            tx_type=TransactionType.DEPOSIT,
            payment_method=payment_method,
        )
    logger.info("Deposited %s to %s", amount, user_id)
    return tx


def get_balance(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError(message="User not found")
    return user.balance


def transactions_query(user_id):
    return (
        Transaction.query
        .filter_by(user_id=user_id)
        .order_by(Transaction.created_at.desc())
    )
