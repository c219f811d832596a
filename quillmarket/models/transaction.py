from quillmarket.extensions import db
from quillmarket.models.enums import TransactionType, PaymentMethod, enum_values
from datetime import datetime
import uuid


def gen_tx_id():
    return f"TXN-{uuid.uuid4().hex[:12]}"


class Transaction(db.Model):
    """Append-only ledger entry. Positive amounts credit the user, negative debit."""

    __tablename__ = "transactions"

    id = db.Column(db.String(50), primary_key=True, default=gen_tx_id)
    user_id = db.Column(db.String(50), db.ForeignKey("users.id"), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    type = db.Column(
        db.Enum(TransactionType, name="transaction_type", values_callable=enum_values),
        nullable=False,
    )
    status = db.Column(db.String(30), nullable=False, default="completed")

    payment_method = db.Column(
        db.Enum(PaymentMethod, name="payment_method", values_callable=enum_values),
        nullable=True,
    )
    order_id = db.Column(db.String(50), db.ForeignKey("orders.id"), nullable=True, index=True)
    payment_details = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("transactions", lazy=True))
