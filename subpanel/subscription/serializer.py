import logging

import yaml

from .errors import SerializationFailed

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/x-yaml"


def render_subscription(entries):
    """Dump proxy entries as a Clash document: ``{"proxies": [...]}``."""
    if not entries:
        raise ValueError("a subscription needs at least one proxy entry")
    document = {"proxies": [entry.to_clash() for entry in entries]}
    try:
        return yaml.safe_dump(
            document,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except (yaml.YAMLError, TypeError, ValueError) as e:
        logger.error(f"Failed to serialize clash subscription: {e}", exc_info=True)
        raise SerializationFailed() from e


def subscription_filename(record):
    if record.remark:
        return f"clash_{record.remark}.yaml"
    return f"clash_{record.id}.yaml"
