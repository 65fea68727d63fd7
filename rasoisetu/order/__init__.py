"""The direct order blueprint."""

from flask import Blueprint

bp = Blueprint("order", __name__, url_prefix="/orders")

from . import routes  # noqa: E402

__all__ = ["routes"]
