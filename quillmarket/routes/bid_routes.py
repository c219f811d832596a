from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required, current_user

from quillmarket.models.enums import UserRole
from quillmarket.services import bid_service
from quillmarket.schemas.bid_schema import bid_create_schema, bid_schema, bids_schema
from quillmarket.schemas.order_schema import order_schema
from quillmarket.utils.auth_utils import role_required
from quillmarket.utils.response_formatter import success_response

bp = Blueprint("bids", __name__, url_prefix="/api/bids")


# ------------------------------------------------------------
#  GET /bids — Bids visible to the current user
# ------------------------------------------------------------
@bp.route("", methods=["GET"])
@jwt_required()
def list_bids():
    bids = bid_service.bids_for_user(current_user)
    return success_response({"bids": bids_schema.dump(bids)})


# ------------------------------------------------------------
#  POST /bids — Place a bid (approved writers, open jobs)
# ------------------------------------------------------------
@bp.route("", methods=["POST"])
@role_required(UserRole.WRITER)
def create_bid():
    data = bid_create_schema.load(request.get_json(silent=True) or {})
    bid = bid_service.place_bid(writer=current_user, **data)
    return success_response({"bid": bid_schema.dump(bid)}, status=201)


# ------------------------------------------------------------
#  POST /bids/<bid_id>/accept — Accept a bid, opening an order
# ------------------------------------------------------------
@bp.route("/<bid_id>/accept", methods=["POST"])
@role_required(UserRole.CLIENT)
def accept_bid(bid_id):
    order = bid_service.accept_bid(bid_id, current_user)
    current_app.logger.info("Order %s created from bid %s", order.id, bid_id)
    return success_response({"order": order_schema.dump(order)}, status=201)


@bp.route("/<bid_id>/reject", methods=["POST"])
@role_required(UserRole.CLIENT)
def reject_bid(bid_id):
    bid = bid_service.reject_bid(bid_id, current_user)
    return success_response({"bid": bid_schema.dump(bid)}, message="Bid rejected")
