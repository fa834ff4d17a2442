import requests
import logging
import json

from ..config import STORAGE_API_URL
from ..auth.utils import api_session, auth_headers

logger = logging.getLogger(__name__)

INBOUND_NOT_FOUND = "inbound not found"


def _log_request_error(action, err, response=None):
    if isinstance(err, requests.exceptions.HTTPError):
        body = response.text if response is not None else "N/A"
        logger.error(f"HTTP error occurred while {action}: {err} - Response: {body}")
    elif isinstance(err, requests.exceptions.ConnectionError):
        logger.error(f"Connection error occurred while {action}: {err}")
    elif isinstance(err, requests.exceptions.Timeout):
        logger.error(f"Timeout occurred while {action}: {err}")
    elif isinstance(err, json.JSONDecodeError):
        logger.error(f"Failed to decode JSON response while {action}: {err}")
    else:
        logger.error(f"An unexpected requests error occurred while {action}: {err}")


def get_inbounds(token):
    url = f"{STORAGE_API_URL}/inbounds"
    r = None
    try:
        logger.debug(f"Fetching inbounds from {url}")
        r = api_session.get(url, headers=auth_headers(token), timeout=15)
        r.raise_for_status()
        inbounds = r.json()
        if not isinstance(inbounds, list):
            logger.error(f"Unexpected inbound list payload of type {type(inbounds).__name__}")
            return None
        logger.info(f"Successfully fetched {len(inbounds)} inbounds.")
        return inbounds
    except (requests.exceptions.RequestException, json.JSONDecodeError) as err:
        _log_request_error("fetching inbounds", err, r)
    return None


def get_inbound(inbound_id, token=None):
    """Fetch one inbound as a dict; ``None`` when it does not exist or cannot be fetched."""
    url = f"{STORAGE_API_URL}/inbounds/{inbound_id}"
    r = None
    try:
        logger.debug(f"Fetching inbound {inbound_id} from {url}")
        r = api_session.get(url, headers=auth_headers(token), timeout=10)
        if r.status_code == 404:
            logger.info(f"Inbound {inbound_id} not found in storage.")
            return None
        r.raise_for_status()
        inbound = r.json()
        if not isinstance(inbound, dict):
            logger.error(f"Unexpected payload for inbound {inbound_id}: {type(inbound).__name__}")
            return None
        return inbound
    except (requests.exceptions.RequestException, json.JSONDecodeError) as err:
        _log_request_error(f"fetching inbound {inbound_id}", err, r)
    return None


def _write(method, url, token, action, payload=None):
    r = None
    try:
        logger.debug(f"{method.upper()} {url} ({action})")
        r = api_session.request(method, url, headers=auth_headers(token), json=payload, timeout=15)
        r.raise_for_status()
        logger.info(f"Succeeded {action}. Status: {r.status_code}")
        return True, None
    except requests.exceptions.RequestException as err:
        _log_request_error(action, err, r)
        if r is not None and r.status_code == 404:
            return False, INBOUND_NOT_FOUND
        return False, f"Failed {action}."


def add_inbound(token, inbound):
    return _write("post", f"{STORAGE_API_URL}/inbounds", token, "adding inbound", inbound)


def update_inbound(token, inbound_id, inbound):
    return _write("put", f"{STORAGE_API_URL}/inbounds/{inbound_id}", token, f"updating inbound {inbound_id}", inbound)


def del_inbound(token, inbound_id):
    return _write("delete", f"{STORAGE_API_URL}/inbounds/{inbound_id}", token, f"deleting inbound {inbound_id}")
