"""Routes for the inventory blueprint."""

from flask import jsonify, request, session

from rasoisetu.auth.decorators import login_required
from rasoisetu.core.constants import ROLE_SUPPLIER
from rasoisetu.core.store import get_store
from rasoisetu.errors import ValidationError
from rasoisetu.utils import first_form_error, serialize_value

from . import bp
from .forms import EditInventoryItemForm, InventoryItemForm
from .services import InventoryService


def _present(items):
    """Attach the stock level badge to each item."""
    for item in items:
        item["stockLevel"] = InventoryService.stock_level(item.get("stock", 0))
    return serialize_value(items)


@bp.route("/", methods=["GET"])
@login_required
def browse_inventory():
    """Browse all items, optionally filtered by ``search`` or ``category``.

    A search term takes precedence over the category filter.
    """
    store = get_store()
    search_term = request.args.get("search", "").strip()
    category = request.args.get("category", "all")

    if search_term:
        items = InventoryService.search_by_name(store, search_term)
    elif category != "all":
        items = InventoryService.get_by_category(store, category)
    else:
        items = InventoryService.get_all_inventory(store)
    return jsonify({"items": _present(items)})


@bp.route("/mine", methods=["GET"])
@login_required(role=ROLE_SUPPLIER)
def my_inventory():
    """List the logged-in supplier's own items."""
    items = InventoryService.get_supplier_inventory(get_store(), session["user_id"])
    return jsonify({"items": _present(items)})


@bp.route("/", methods=["POST"])
@login_required(role=ROLE_SUPPLIER)
def add_item():
    """Add an item to the logged-in supplier's inventory."""
    form = InventoryItemForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    item_id = InventoryService.add_item(
        get_store(),
        session["user_id"],
        form.name.data,
        form.category.data,
        form.price.data,
        form.unit.data,
        form.stock.data,
        form.description.data,
    )
    return (
        jsonify({"status": "success", "message": "Item added.", "id": item_id}),
        201,
    )


@bp.route("/<string:item_id>", methods=["PATCH"])
@login_required(role=ROLE_SUPPLIER)
def edit_item(item_id):
    """Change some fields of an item."""
    form = EditInventoryItemForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    InventoryService.update_item(
        get_store(), item_id, session["user_id"], form.changed_fields()
    )
    return jsonify({"status": "success", "message": "Item updated."})


@bp.route("/<string:item_id>", methods=["DELETE"])
@login_required(role=ROLE_SUPPLIER)
def delete_item(item_id):
    """Delete an item."""
    InventoryService.delete_item(get_store(), item_id, session["user_id"])
    return jsonify({"status": "success", "message": "Item deleted."})
