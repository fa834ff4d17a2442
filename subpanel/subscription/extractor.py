import json
import logging

from .models import Credentials, SecurityKind, StreamSettings, TransportKind, TransportSelection, as_int, as_object, as_str

logger = logging.getLogger(__name__)


def parse_document(text):
    """Parse a settings blob stored on an inbound; anything unusable becomes ``{}``."""
    if not text:
        return {}
    try:
        doc = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning(f"Ignoring malformed settings document: {e}")
        return {}
    if not isinstance(doc, dict):
        logger.warning(f"Ignoring settings document with top-level {type(doc).__name__}, expected object.")
        return {}
    return doc


def extract_credentials(settings):
    """Client id and alterId of the first entry in ``settings["clients"]``."""
    clients = settings.get("clients") if isinstance(settings, dict) else None
    if not isinstance(clients, list) or not clients:
        return Credentials()
    first = as_object(clients[0])
    if first is None:
        return Credentials()
    return Credentials(client_id=as_str(first.get("id")), alter_id=as_int(first.get("alterId")))


def decode_stream(doc):
    return StreamSettings.from_dict(doc)


def select_transport(stream):
    return TransportSelection(
        kind=TransportKind.parse(stream.network),
        security=SecurityKind.parse(stream.security),
        network=stream.network,
    )
