# Restart bookkeeping for the proxy process; runs beside the web app, not inside requests.

from .restart import RestartFlag, RestartScheduler, restart_flag, restart_xray

__all__ = ['RestartFlag', 'RestartScheduler', 'restart_flag', 'restart_xray']

import logging
logger = logging.getLogger(__name__)
logger.debug("subpanel.core package initialized.")
