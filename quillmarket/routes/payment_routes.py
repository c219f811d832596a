from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user

from quillmarket.models.enums import UserRole
from quillmarket.services import wallet_service
from quillmarket.schemas.transaction_schema import (
    withdrawal_schema,
    transaction_schema,
    transactions_schema,
)
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.pagination import paginate_query
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("payments", __name__, url_prefix="/api")


@bp.route("/balance", methods=["GET"])
@jwt_required()
def balance():
    return success_response({"balance": float(wallet_service.get_balance(current_user.id))})


@bp.route("/transactions", methods=["GET"])
@jwt_required()
def transactions():
    items, pagination = paginate_query(
        wallet_service.transactions_query(current_user.id),
        request.args.get("page", 1),
        request.args.get("limit", 20),
    )
    return success_response({
        "transactions": transactions_schema.dump(items),
        "pagination": pagination,
    })


# ------------------------------------------------------------
#  POST /withdrawals — Debit balance and queue a payout
# ------------------------------------------------------------
@bp.route("/withdrawals", methods=["POST"])
@role_required(UserRole.WRITER, UserRole.CLIENT)
def request_withdrawal():
    data = withdrawal_schema.load(request.get_json(silent=True) or {})
    tx = wallet_service.request_withdrawal(
        current_user,
        amount=data["amount"],
        payment_method=data["payment_method"],
        payment_details=data["payment_details"],
    )
    return success_response({"transaction": transaction_schema.dump(tx)}, status=201)
