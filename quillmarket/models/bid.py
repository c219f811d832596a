from quillmarket.extensions import db
from quillmarket.models.enums import BidStatus, enum_values
from datetime import datetime
import uuid


def gen_bid_id():
    return f"BID-{str(uuid.uuid4())[:8]}"


class Bid(db.Model):
    __tablename__ = "bids"

    id = db.Column(db.String(50), primary_key=True, default=gen_bid_id)
    job_id = db.Column(db.String(50), db.ForeignKey("jobs.id"), nullable=False, index=True)
    writer_id = db.Column(db.String(50), db.ForeignKey("users.id"), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    delivery_time = db.Column(db.Integer, nullable=False)
    cover_letter = db.Column(db.Text, nullable=False)

    status = db.Column(
        db.Enum(BidStatus, name="bid_status", values_callable=enum_values),
        nullable=False,
        default=BidStatus.PENDING,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    job = db.relationship("Job", backref=db.backref("bids", lazy=True, cascade="all, delete-orphan"))
    writer = db.relationship("User", backref=db.backref("bids", lazy=True))
