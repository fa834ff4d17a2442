import logging
import re
from dataclasses import dataclass

from .builder import build_proxy_entry
from .errors import InvalidIdentifier
from .extractor import decode_stream, extract_credentials, parse_document, select_transport
from .serializer import render_subscription, subscription_filename
from .transport import build_transport_options

logger = logging.getLogger(__name__)

_DECIMAL_ID = re.compile(r"[+-]?[0-9]{1,19}")

# strconv.Atoi range on 64-bit platforms.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class ClashSubscription:
    body: str
    filename: str


def parse_inbound_id(raw):
    """Parse a path parameter as a base-10 integer or raise ``InvalidIdentifier``."""
    text = raw if isinstance(raw, str) else ""
    if not _DECIMAL_ID.fullmatch(text):
        raise InvalidIdentifier()
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidIdentifier()
    return value


def generate_clash_subscription(record):
    """Translate one inbound record into a Clash subscription document.

    Pure: no I/O and no shared state. Raises ``UnsupportedProtocol``,
    ``MissingAddress`` or ``SerializationFailed``.
    """
    settings = parse_document(record.settings)
    stream = decode_stream(parse_document(record.stream_settings))

    credentials = extract_credentials(settings)
    selection = select_transport(stream)
    options = build_transport_options(selection.kind, stream)
    entry = build_proxy_entry(record, credentials, selection, options, stream)

    body = render_subscription([entry])
    logger.debug(f"Built clash subscription for inbound {record.id} ({selection.network or 'tcp'}, {selection.security.name})")
    return ClashSubscription(body=body, filename=subscription_filename(record))
