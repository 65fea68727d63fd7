"""Routes for the auth blueprint."""

from firebase_admin import auth
from flask import current_app, jsonify, request, session
from flask_wtf.csrf import generate_csrf

from rasoisetu.core.store import get_store
from rasoisetu.extensions import csrf
from rasoisetu.user.services import UserService

from . import bp


@bp.route("/session_login", methods=["POST"])
@csrf.exempt
def session_login():
    """Exchange a Firebase ID token for a server-side session.

    Sign-in itself happens in the Firebase client SDK. The client posts the
    resulting ID token here and uses the returned CSRF token on later writes.
    """
    id_token = (request.get_json(silent=True) or {}).get("idToken")
    if not id_token:
        return jsonify({"status": "error", "message": "Missing ID token."}), 400

    try:
        decoded_token = auth.verify_id_token(id_token)
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, ValueError) as e:
        current_app.logger.warning(f"Rejected ID token: {e}")
        return jsonify({"status": "error", "message": "Invalid or expired token."}), 401

    uid = decoded_token["uid"]
    profile = UserService.get_user_profile(get_store(), uid)
    session.clear()
    session["user_id"] = uid
    current_app.logger.info(f"Session started for {uid}")
    return jsonify(
        {
            "status": "success",
            "profileComplete": profile is not None,
            "role": profile.get("role") if profile else None,
            "csrfToken": generate_csrf(),
        }
    )


@bp.route("/logout", methods=["POST"])
def logout():
    """Clear the server-side session. Firebase sign-out happens on the client."""
    session.clear()
    return jsonify({"status": "success", "message": "You have been logged out."})
