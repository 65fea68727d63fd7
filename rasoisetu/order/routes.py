"""Routes for the direct order blueprint."""

from flask import g, jsonify, request, session

from rasoisetu.auth.decorators import login_required
from rasoisetu.core.constants import ROLE_RETAILER, ROLE_SUPPLIER
from rasoisetu.core.store import get_store
from rasoisetu.errors import ValidationError
from rasoisetu.utils import first_form_error, serialize_value

from . import bp
from .forms import OrderStatusForm
from .services import OrderService


@bp.route("/", methods=["GET"])
@login_required
def list_orders():
    """List the user's orders: placed ones for retailers, received for suppliers."""
    store = get_store()
    user_id = session["user_id"]
    if g.user.get("role") == ROLE_SUPPLIER:
        orders = OrderService.get_supplier_orders(store, user_id)
    else:
        orders = OrderService.get_retailer_orders(store, user_id)
    orders = OrderService.filter_orders_by_status(
        orders, request.args.get("status", "all")
    )
    return jsonify({"orders": serialize_value(orders)})


@bp.route("/", methods=["POST"])
@login_required(role=ROLE_RETAILER)
def place_order():
    """Place a direct order with one supplier.

    Expects JSON: ``{"supplierId": ..., "items": [...], "groupOrderId": ...}``.
    """
    payload = request.get_json(silent=True) or {}
    order_id = OrderService.create_order(
        get_store(),
        session["user_id"],
        payload.get("supplierId"),
        payload.get("items"),
        payload.get("groupOrderId"),
    )
    return (
        jsonify({"status": "success", "message": "Order placed.", "id": order_id}),
        201,
    )


@bp.route("/<string:order_id>/status", methods=["POST"])
@login_required(role=ROLE_SUPPLIER)
def update_status(order_id):
    """Confirm, reject or complete an order."""
    form = OrderStatusForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    OrderService.update_order_status(
        get_store(), order_id, session["user_id"], form.status.data
    )
    return jsonify({"status": "success", "message": "Order status updated."})


@bp.route("/<string:order_id>/invoice", methods=["GET"])
@login_required
def invoice(order_id):
    """Return the invoice data for an order."""
    order = OrderService.get_order(get_store(), order_id, session["user_id"])
    return jsonify(OrderService.build_invoice(order).to_dict())
