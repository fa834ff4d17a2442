import logging

from .errors import MissingAddress, UnsupportedProtocol
from .models import ProxyEntry, SecurityKind

logger = logging.getLogger(__name__)

SUPPORTED_PROTOCOL = "vmess"
WILDCARD_ADDRESS = "0.0.0.0"


def resolve_port(record):
    if record.speed_port > 0:
        return record.speed_port
    return record.port


def resolve_server_name(security, stream):
    """SNI for the client; only ever read from the sub-document matching ``security``."""
    if security is SecurityKind.TLS and stream.tls is not None:
        return stream.tls.server_name
    if security is SecurityKind.XTLS and stream.xtls is not None:
        return stream.xtls.server_name
    return ""


def build_proxy_entry(record, credentials, selection, options, stream):
    if record.protocol != SUPPORTED_PROTOCOL:
        logger.info(f"Inbound {record.id}: protocol '{record.protocol}' cannot be exported to clash.")
        raise UnsupportedProtocol()
    server = record.speed_ip
    if not server or server == WILDCARD_ADDRESS:
        logger.info(f"Inbound {record.id}: no client-facing address configured.")
        raise MissingAddress()

    return ProxyEntry(
        name=record.remark,
        server=server,
        port=resolve_port(record),
        uuid=credentials.client_id,
        alter_id=credentials.alter_id,
        tls=selection.security.is_tls,
        network=selection.network,
        servername=resolve_server_name(selection.security, stream),
        options=options,
    )
