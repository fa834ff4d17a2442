from flask import Blueprint, request, session, jsonify
import logging

from .utils import get_token

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

@auth_bp.route("/login", methods=["POST"])
def login():
    # Accept both a login form and a JSON body.
    payload = request.get_json(silent=True) or request.form
    username = payload.get("username")
    password = payload.get("password")

    if not username or not password:
        return jsonify({"success": False, "error": "Username and password are required."}), 400

    logger.info(f"Login attempt for user: {username} from {request.remote_addr}")
    token = get_token(username, password)

    if not token:
        logger.warning(f"Login failed for user: {username}. Invalid credentials or API error.")
        return jsonify({"success": False, "error": "Invalid credentials or cannot connect to API."}), 401

    session["token"] = token
    session["username"] = username
    logger.info(f"User {username} logged in successfully.")
    return jsonify({"success": True, "message": "Login successful."})

@auth_bp.route("/logout")
def logout():
    username = session.get("username", "Unknown user")
    session.clear()
    logger.info(f"User {username} logged out.")
    return jsonify({"success": True, "message": "You have been logged out."})
