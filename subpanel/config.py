import json
import os
import logging

logger = logging.getLogger(__name__)

# Installed layout keeps panel.json next to the package under /opt,
# otherwise fall back to the source checkout.
INSTALLED_BASE_DIR = "/opt/subpanel"
DEV_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if os.path.exists(os.path.join(INSTALLED_BASE_DIR, "panel.json")):
    BASE_DIR = INSTALLED_BASE_DIR
else:
    BASE_DIR = DEV_BASE_DIR

CONFIG_FILE_PATH = os.environ.get("SUBPANEL_CONFIG", os.path.join(BASE_DIR, "panel.json"))


DEFAULT_CONFIG = {
    "flask_port": 54321,
    "use_https": False,
    "domain": "",
    "cert_file": "",
    "key_file": "",
    "storage_api_url": "http://127.0.0.1:8000/api",
    "storage_verify_tls": True,
    "api_token": "",
    "restart_check_interval": 10,
    "log_level": "INFO"
}

def get_config(path=CONFIG_FILE_PATH):
    logger.info(f"Attempting to load config from: {path}")
    if not os.path.exists(path):
        logger.warning(f"{path} not found. Using default config.")
        return dict(DEFAULT_CONFIG)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.error(f"Error loading {path}: {e}. Using default config.")
        return dict(DEFAULT_CONFIG)
    if not isinstance(data, dict):
        logger.error(f"{path} does not hold a JSON object. Using default config.")
        return dict(DEFAULT_CONFIG)
    config = {**DEFAULT_CONFIG, **data}
    logger.info(f"Config loaded successfully from {path}")
    return config

app_config = get_config()

FLASK_PORT = app_config["flask_port"]
USE_HTTPS = app_config["use_https"]
DOMAIN = app_config["domain"]
CERT_FILE = app_config["cert_file"] # Absolute path or relative to BASE_DIR
KEY_FILE = app_config["key_file"]
HOST = "0.0.0.0"

STORAGE_API_URL = app_config["storage_api_url"].rstrip("/")
STORAGE_VERIFY_TLS = app_config["storage_verify_tls"]
# Service token for calls made outside a login session (public clash route, restart job).
API_TOKEN = os.environ.get("SUBPANEL_API_TOKEN", app_config["api_token"]) or None
RESTART_CHECK_INTERVAL = int(app_config["restart_check_interval"])
LOG_LEVEL = str(app_config["log_level"]).upper()

if USE_HTTPS:
    if CERT_FILE and not os.path.isabs(CERT_FILE):
        CERT_FILE = os.path.join(BASE_DIR, CERT_FILE)
    if KEY_FILE and not os.path.isabs(KEY_FILE):
        KEY_FILE = os.path.join(BASE_DIR, KEY_FILE)

logger.info(f"Base directory determined as: {BASE_DIR}")
logger.info(f"Storage API URL: {STORAGE_API_URL}")
if USE_HTTPS:
    logger.info(f"Flask SSL enabled. Cert: {CERT_FILE}, Key: {KEY_FILE}")
