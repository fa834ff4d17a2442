# Inbound panel routes and the clash subscription download routes.

from .routes import inbounds_bp, clash_bp, serve_clash_subscription
from .utils import get_inbounds, get_inbound, add_inbound, update_inbound, del_inbound

__all__ = [
    'inbounds_bp',
    'clash_bp',
    'serve_clash_subscription',
    'get_inbounds',
    'get_inbound',
    'add_inbound',
    'update_inbound',
    'del_inbound'
]

import logging
logger = logging.getLogger(__name__)
logger.debug("subpanel.inbounds package initialized.")
