"""Routes for the group order blueprint."""

from flask import current_app, jsonify, session

from rasoisetu.auth.decorators import login_required
from rasoisetu.core.store import get_store
from rasoisetu.errors import ValidationError
from rasoisetu.utils import first_form_error, utc_now

from . import bp
from .forms import GroupOrderForm, JoinGroupOrderForm
from .services import GroupOrderService
from .utils import summarize_group_order


@bp.route("/", methods=["GET"])
@login_required
def list_group_orders():
    """List active group orders, soonest deadline first.

    Clients poll this endpoint every ``refreshSeconds`` to pick up joins made
    by other vendors.
    """
    now = utc_now()
    user_id = session["user_id"]
    group_orders = GroupOrderService.list_active_group_orders(get_store())
    return jsonify(
        {
            "groupOrders": [
                summarize_group_order(group_order, user_id, now)
                for group_order in group_orders
            ],
            "refreshSeconds": current_app.config["GROUP_ORDER_REFRESH_SECONDS"],
        }
    )


@bp.route("/", methods=["POST"])
@login_required
def create_group_order():
    """Start a new group order with the current user as its first member."""
    form = GroupOrderForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    group_order_id = GroupOrderService.create_group_order(
        get_store(),
        session["user_id"],
        form.item_name.data,
        form.category.data,
        form.target_price.data,
        form.unit.data,
        form.min_vendors.data,
        form.deadline.data,
    )
    return (
        jsonify(
            {
                "status": "success",
                "message": "Group order created successfully.",
                "id": group_order_id,
            }
        ),
        201,
    )


@bp.route("/<string:group_order_id>", methods=["GET"])
@login_required
def view_group_order(group_order_id):
    """Display a single group order."""
    group_order = GroupOrderService.get_group_order(get_store(), group_order_id)
    return jsonify(summarize_group_order(group_order, session["user_id"]))


@bp.route("/<string:group_order_id>/join", methods=["POST"])
@login_required
def join_group_order(group_order_id):
    """Join a group order, or change the quantity already requested."""
    form = JoinGroupOrderForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    store = get_store()
    user_id = session["user_id"]
    quantity = form.quantity.data or 1
    GroupOrderService.join_group_order(store, group_order_id, user_id, quantity)
    current_app.logger.info(f"{user_id} joined {group_order_id} for {quantity}")

    group_order = GroupOrderService.get_group_order(store, group_order_id)
    return jsonify(
        {
            "status": "success",
            "message": "Joined group order successfully.",
            "groupOrder": summarize_group_order(group_order, user_id),
        }
    )
