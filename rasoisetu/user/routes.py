"""Routes for the user blueprint."""

from flask import g, jsonify, request, session

from rasoisetu.auth.decorators import login_required
from rasoisetu.core.constants import ROLE_SUPPLIER
from rasoisetu.core.store import get_store
from rasoisetu.errors import ValidationError
from rasoisetu.utils import first_form_error, serialize_value

from . import bp
from .forms import ProfileForm, SupplierProfileForm
from .services import UserService


@bp.route("/profile", methods=["POST"])
@login_required
def create_profile():
    """Complete sign-up by recording the user's role."""
    form = ProfileForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    store = get_store()
    UserService.create_user_profile(
        store,
        session["user_id"],
        form.email.data,
        form.role.data,
        form.language.data,
    )
    return jsonify({"status": "success", "message": "Profile created."}), 201


@bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the logged-in user's profile and, for suppliers, their store."""
    payload = {"user": serialize_value(g.user)}
    if g.user.get("role") == ROLE_SUPPLIER:
        supplier = UserService.get_supplier_profile(get_store(), session["user_id"])
        payload["supplier"] = serialize_value(supplier)
    return jsonify(payload)


@bp.route("/supplier-profile", methods=["PUT"])
@login_required(role=ROLE_SUPPLIER)
def update_supplier_profile():
    """Update the logged-in supplier's store details."""
    form = SupplierProfileForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    UserService.update_supplier_profile(
        get_store(),
        session["user_id"],
        form.store_name.data,
        form.location.data,
        form.phone.data,
        form.address.data,
    )
    return jsonify({"status": "success", "message": "Store details updated."})


@bp.route("/suppliers", methods=["GET"])
@login_required
def list_suppliers():
    """List supplier stores, optionally filtered by ``search``."""
    suppliers = UserService.get_all_suppliers(get_store())
    suppliers = UserService.search_suppliers(suppliers, request.args.get("search", ""))
    return jsonify({"suppliers": serialize_value(suppliers)})
