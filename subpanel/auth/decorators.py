from functools import wraps
from flask import session, request, jsonify
import logging

logger = logging.getLogger(__name__)

def login_required(f):
    """
    Decorator to ensure a user is logged in before accessing a route.
    Unauthenticated callers get a 401 JSON error instead of the view.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not session.get('token'):
            logger.warning(f"Access denied for unauthenticated user to {request.path}")
            return jsonify({"success": False, "error": "You need to be logged in to access this resource."}), 401
        return f(*args, **kwargs)
    return decorated_function
