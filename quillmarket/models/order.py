from quillmarket.extensions import db
from quillmarket.models.enums import OrderStatus, enum_values
from datetime import datetime
import uuid


def gen_order_id():
    return f"ORD-{str(uuid.uuid4())[:8]}"


class Order(db.Model):
    __tablename__ = "orders"

    __table_args__ = (
        db.Index("idx_orders_status", "status"),
    )

    id = db.Column(db.String(50), primary_key=True, default=gen_order_id)

    # one order per job and per accepted bid
    job_id = db.Column(db.String(50), db.ForeignKey("jobs.id"), nullable=False, unique=True)
    bid_id = db.Column(db.String(50), db.ForeignKey("bids.id"), nullable=False, unique=True)

    client_id = db.Column(db.String(50), db.ForeignKey("users.id"), nullable=False, index=True)
    writer_id = db.Column(db.String(50), db.ForeignKey("users.id"), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    deadline = db.Column(db.DateTime, nullable=False)

    status = db.Column(
        db.Enum(OrderStatus, name="order_status", values_callable=enum_values),
        nullable=False,
        default=OrderStatus.IN_PROGRESS,
    )
    revision_notes = db.Column(db.Text, nullable=True)

    completed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    job = db.relationship("Job", backref=db.backref("order", uselist=False))
    bid = db.relationship("Bid")
    client = db.relationship("User", foreign_keys=[client_id], backref="client_orders", lazy=True)
    writer = db.relationship("User", foreign_keys=[writer_id], backref="writer_orders", lazy=True)
