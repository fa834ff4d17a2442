import logging

# Basic logging for the subpanel package.
# app.py raises or lowers the level once the config file has been read.
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)
logger.debug("subpanel package initialized.")

__version__ = "0.1.0"
