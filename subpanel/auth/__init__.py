# Login/logout against the storage API and the login_required guard.

from .routes import auth_bp
from .utils import get_token, api_session
from .decorators import login_required

__all__ = ['auth_bp', 'get_token', 'api_session', 'login_required']

import logging
logger = logging.getLogger(__name__)
logger.debug("subpanel.auth package initialized.")
