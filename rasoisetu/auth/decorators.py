"""Decorators for the auth blueprint."""

from functools import wraps

from flask import g, jsonify, session


def login_required(f=None, role=None):
    """Reject the request unless a user is logged in.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(role="supplier")
    def supplier_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if "user_id" not in session or g.get("user") is None:
                return (
                    jsonify({"status": "error", "message": "Please log in first."}),
                    401,
                )
            if role and g.user.get("role") != role:
                return (
                    jsonify(
                        {
                            "status": "error",
                            "message": f"Only a {role} can do that.",
                        }
                    ),
                    403,
                )
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
