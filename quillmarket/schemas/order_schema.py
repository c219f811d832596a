from marshmallow import fields, validate, EXCLUDE

from quillmarket.extensions import ma
from quillmarket.models.enums import OrderStatus


class RevisionRequestSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    notes = fields.String(required=True, validate=validate.Length(min=5))


class OrderSchema(ma.Schema):
    id = fields.String()
    job_id = fields.String()
    bid_id = fields.String()
    client_id = fields.String()
    writer_id = fields.String()
    amount = fields.Float()
    deadline = fields.DateTime()
    status = fields.Enum(OrderStatus, by_value=True)
    revision_notes = fields.String(allow_none=True)
    completed_at = fields.DateTime(allow_none=True)
    created_at = fields.DateTime()


revision_request_schema = RevisionRequestSchema()
order_schema = OrderSchema()
orders_schema = OrderSchema(many=True)
