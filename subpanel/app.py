import logging
import secrets # For Flask secret_key
import os

from flask import Flask, request, jsonify

from .config import FLASK_PORT, HOST, USE_HTTPS, DOMAIN, CERT_FILE, KEY_FILE, LOG_LEVEL

logging.getLogger("subpanel").setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


# --- Flask App Initialization ---
app = Flask(__name__)

app.secret_key = os.environ.get("FLASK_SECRET_KEY", secrets.token_hex(16))

# --- Register Blueprints ---
from .auth import auth_bp
from .inbounds import inbounds_bp, clash_bp

app.register_blueprint(auth_bp)
app.register_blueprint(inbounds_bp)
app.register_blueprint(clash_bp)
logger.info("All blueprints registered successfully.")

# --- Global Error Handlers ---
@app.errorhandler(404)
def page_not_found(e):
    logger.warning(f"404 Not Found: {request.path} - {e}")
    return jsonify({"success": False, "error": "Not found"}), 404

@app.errorhandler(500)
def internal_server_error(e):
    logger.error(f"500 Internal Server Error: {request.path} - Original error: {e}", exc_info=True)
    return jsonify({"success": False, "error": "Internal server error"}), 500

@app.before_request
def log_request_info():
    logger.debug(f"Request: {request.method} {request.url} from {request.remote_addr}")


# --- Main Execution ---
def run_app():
    from .core import RestartScheduler

    ssl_context_val = None
    if USE_HTTPS:
        if CERT_FILE and KEY_FILE and os.path.exists(CERT_FILE) and os.path.exists(KEY_FILE):
            ssl_context_val = (CERT_FILE, KEY_FILE)
            logger.info(f"Starting HTTPS server on https://{DOMAIN or HOST}:{FLASK_PORT}")
        else:
            logger.error(f"USE_HTTPS is true, but cert_file ('{CERT_FILE}') or key_file ('{KEY_FILE}') is missing or invalid. Falling back to HTTP.")

    if not ssl_context_val:
        logger.info(f"Starting HTTP server on http://{HOST}:{FLASK_PORT}")

    restart_scheduler = RestartScheduler()
    restart_scheduler.start()

    app_debug_mode = os.environ.get("FLASK_DEBUG", "False").lower() == "true"
    logger.info(f"Flask debug mode is set to: {app_debug_mode}")
    try:
        # The reloader would start a second scheduler in the child process.
        app.run(host=HOST, port=FLASK_PORT, ssl_context=ssl_context_val, debug=app_debug_mode, use_reloader=False)
    finally:
        restart_scheduler.stop()

if __name__ == "__main__":
    logger.info("Application starting in development mode via __main__.")
    run_app()
