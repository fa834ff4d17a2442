import logging

from .models import GrpcOptions, H2Options, TransportKind, WsOptions

logger = logging.getLogger(__name__)

CANONICAL_HOST = "Host"


def normalize_host_header(headers):
    """Collapse every casing of the host header into a single ``Host`` key.

    Clash clients only look at ``Host``. An existing ``Host`` value wins,
    otherwise the first matching key in document order is kept.
    """
    out = {}
    host_value = None
    for key, value in headers.items():
        if key.lower() == "host":
            if key == CANONICAL_HOST or host_value is None:
                host_value = value
            continue
        out[key] = value
    if host_value is not None:
        out[CANONICAL_HOST] = host_value
    return out


def _ws_options(stream):
    if stream.ws is None:
        return None
    return WsOptions(path=stream.ws.path, headers=normalize_host_header(stream.ws.headers))


def _h2_options(stream):
    if stream.http is None:
        return None
    return H2Options(host=[h for h in stream.http.host if h != ""], path=stream.http.path)


def _grpc_options(stream):
    if stream.grpc is None:
        return None
    return GrpcOptions(service_name=stream.grpc.service_name)


_ADAPTERS = {
    TransportKind.WEBSOCKET: _ws_options,
    TransportKind.HTTP2: _h2_options,
    TransportKind.GRPC: _grpc_options,
}


def build_transport_options(kind, stream):
    """Clash ``*-opts`` block for the transport, or ``None`` when there is nothing to emit.

    tcp, kcp, quic and anything unknown carry no option block.
    """
    adapter = _ADAPTERS.get(kind)
    if adapter is None:
        logger.debug(f"No option block for transport kind {kind.name}")
        return None
    return adapter(stream)
