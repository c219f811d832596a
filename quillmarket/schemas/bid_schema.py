from marshmallow import fields, validate, EXCLUDE
from decimal import Decimal

from quillmarket.extensions import ma
from quillmarket.models.enums import BidStatus


class BidCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    job_id = fields.String(required=True)
    amount = fields.Decimal(
        required=True,
        places=2,
        validate=validate.Range(min=Decimal("1"), error="Bid amount must be at least 1"),
    )
    delivery_time = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="Delivery time must be at least 1 day"),
    )
    cover_letter = fields.String(required=True, validate=validate.Length(min=10))


class BidSchema(ma.Schema):
    id = fields.String()
    job_id = fields.String()
    writer_id = fields.String()
    amount = fields.Float()
    delivery_time = fields.Integer()
    cover_letter = fields.String()
    status = fields.Enum(BidStatus, by_value=True)
    created_at = fields.DateTime()


bid_create_schema = BidCreateSchema()
bid_schema = BidSchema()
bids_schema = BidSchema(many=True)
