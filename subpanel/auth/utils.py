import requests
import logging
import json

from ..config import STORAGE_API_URL, STORAGE_VERIFY_TLS

logger = logging.getLogger(__name__)

# Shared session for every call to the storage API.
api_session = requests.Session()
api_session.verify = STORAGE_VERIFY_TLS
if not STORAGE_VERIFY_TLS:
    logger.warning("Storage API SSL verification is DISABLED. Only use this with a known self-signed cert.")


def auth_headers(token):
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def get_token(username, password):
    url = f"{STORAGE_API_URL}/login"
    data = {"username": username, "password": password}
    try:
        logger.debug(f"Requesting token from {url} for user {username}")
        response = api_session.post(url, data=data, timeout=10)
        response.raise_for_status()
        access_token = response.json().get("access_token")
        if access_token:
            logger.info(f"Token obtained successfully for user {username}")
            return access_token
        logger.warning(f"Token request successful but no access_token in response for user {username}")
        return None
    except requests.exceptions.HTTPError as http_err:
        logger.error(f"HTTP error occurred while getting token for {username}: {http_err}")
    except requests.exceptions.ConnectionError as conn_err:
        logger.error(f"Connection error occurred while getting token for {username}: {conn_err}")
    except requests.exceptions.Timeout as timeout_err:
        logger.error(f"Timeout occurred while getting token for {username}: {timeout_err}")
    except json.JSONDecodeError as json_err:
        logger.error(f"Failed to decode JSON response while getting token for {username}: {json_err}")
    except requests.exceptions.RequestException as req_err:
        logger.error(f"An unexpected requests error occurred while getting token for {username}: {req_err}")
    return None
