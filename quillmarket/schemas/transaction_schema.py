from marshmallow import fields, validate, EXCLUDE
from decimal import Decimal

from quillmarket.extensions import ma
from quillmarket.models.enums import TransactionType, PaymentMethod

MIN_WITHDRAWAL = Decimal("10")
MAX_WITHDRAWAL = Decimal("5000")


class WithdrawalSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    amount = fields.Decimal(
        required=True,
        places=2,
        validate=validate.Range(
            min=MIN_WITHDRAWAL,
            max=MAX_WITHDRAWAL,
            error="Withdrawal amount must be between 10 and 5000",
        ),
    )
    payment_method = fields.Enum(PaymentMethod, by_value=True, required=True)
    payment_details = fields.Raw(required=True)


class TransactionSchema(ma.Schema):
    id = fields.String()
    user_id = fields.String()
    amount = fields.Float()
    type = fields.Enum(TransactionType, by_value=True)
    status = fields.String()
    payment_method = fields.Enum(PaymentMethod, by_value=True, allow_none=True)
    order_id = fields.String(allow_none=True)
    payment_details = fields.String(allow_none=True)
    created_at = fields.DateTime()


withdrawal_schema = WithdrawalSchema()
transaction_schema = TransactionSchema()
transactions_schema = TransactionSchema(many=True)
