import json
import logging
import threading

import requests
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..config import STORAGE_API_URL, API_TOKEN, RESTART_CHECK_INTERVAL
from ..auth.utils import api_session, auth_headers

logger = logging.getLogger(__name__)


class RestartFlag:
    """Marks that the proxy process must be restarted after an inbound change."""

    def __init__(self):
        self._lock = threading.Lock()
        self._need_restart = False

    def set_need_restart(self):
        with self._lock:
            self._need_restart = True

    def is_need_restart_and_set_false(self):
        with self._lock:
            need = self._need_restart
            self._need_restart = False
            return need


restart_flag = RestartFlag()


def restart_xray(token):
    url = f"{STORAGE_API_URL}/xray/restart"
    r = None
    try:
        r = api_session.post(url, headers=auth_headers(token), timeout=15)
        r.raise_for_status()
        logger.info("Xray restarted successfully.")
        return {"status": "success"}
    except requests.exceptions.HTTPError as http_err:
        logger.error(f"HTTP error restarting xray: {http_err} - Response: {r.text if r is not None else 'N/A'}")
        return {"status": "error", "message": f"API error (status: {r.status_code if r is not None else 'Unknown'})"}
    except requests.exceptions.RequestException as req_err:
        logger.error(f"Request error restarting xray: {req_err}")
        return {"status": "error", "message": str(req_err)}


class RestartScheduler:
    """Periodically restarts xray when an inbound change has been flagged."""

    def __init__(self, flag=restart_flag, token=API_TOKEN, interval_seconds=RESTART_CHECK_INTERVAL):
        self.flag = flag
        self.token = token
        self.interval_seconds = interval_seconds
        self.scheduler = BackgroundScheduler(daemon=True)

    def check_and_restart(self):
        if not self.flag.is_need_restart_and_set_false():
            return None
        result = restart_xray(self.token)
        if result.get("status") != "success":
            logger.error(f"restart xray failed: {json.dumps(result)}")
        return result

    def start(self):
        logger.info(f"Checking for pending xray restarts every {self.interval_seconds}s.")
        self.scheduler.add_job(
            self.check_and_restart,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id="xray_restart_check",
            name="Restart xray after inbound changes",
            replace_existing=True
        )
        self.scheduler.start()

    def stop(self):
        if self.scheduler.running:
            logger.info("Shutting down restart scheduler.")
            self.scheduler.shutdown()
