"""Typed views over inbound records and their settings documents.

Every ``from_dict`` here is tolerant: a missing key or a value of the wrong
JSON type decodes to the field's default instead of raising. Sub-structures
for a transport or security layer decode to ``None`` when their document is
absent, so callers can tell "not configured" apart from "configured empty".
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


def as_str(value, default=""):
    return value if isinstance(value, str) else default


def as_int(value, default=0):
    # JSON numbers arrive as int or float; bool is an int subclass and is rejected.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    try:
        return int(value)
    except (OverflowError, ValueError):  # inf / nan
        return default


def as_object(value):
    return value if isinstance(value, dict) else None


class TransportKind(Enum):
    NONE = ""
    WEBSOCKET = "ws"
    HTTP2 = "http"
    GRPC = "grpc"
    UNRECOGNIZED = "?"

    @classmethod
    def parse(cls, network):
        if not network:
            return cls.NONE
        for kind in (cls.WEBSOCKET, cls.HTTP2, cls.GRPC):
            if network == kind.value:
                return kind
        return cls.UNRECOGNIZED


class SecurityKind(Enum):
    NONE = "none"
    TLS = "tls"
    XTLS = "xtls"
    UNRECOGNIZED = "?"

    @classmethod
    def parse(cls, security):
        if not security or security == cls.NONE.value:
            return cls.NONE
        if security == cls.TLS.value:
            return cls.TLS
        if security == cls.XTLS.value:
            return cls.XTLS
        return cls.UNRECOGNIZED

    @property
    def is_tls(self):
        return self in (SecurityKind.TLS, SecurityKind.XTLS)


@dataclass(frozen=True)
class InboundRecord:
    """Read-only snapshot of an inbound as the storage API returns it."""

    id: int = 0
    protocol: str = ""
    remark: str = ""
    port: int = 0
    speed_ip: str = ""
    speed_port: int = 0
    settings: str = ""
    stream_settings: str = ""

    @classmethod
    def from_dict(cls, obj):
        obj = as_object(obj) or {}
        return cls(
            id=as_int(obj.get("id")),
            protocol=as_str(obj.get("protocol")),
            remark=as_str(obj.get("remark")),
            port=as_int(obj.get("port")),
            speed_ip=as_str(obj.get("speedIp")),
            speed_port=as_int(obj.get("speedPort")),
            settings=as_str(obj.get("settings")),
            stream_settings=as_str(obj.get("streamSettings")),
        )


@dataclass(frozen=True)
class Credentials:
    client_id: str = ""
    alter_id: int = 0


@dataclass
class WsSettings:
    path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, obj):
        obj = as_object(obj)
        if obj is None:
            return None
        headers = {}
        raw_headers = as_object(obj.get("headers")) or {}
        for key, value in raw_headers.items():
            if isinstance(value, str):
                headers[key] = value
        return cls(path=as_str(obj.get("path")), headers=headers)


@dataclass
class HttpSettings:
    path: str = ""
    host: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj):
        obj = as_object(obj)
        if obj is None:
            return None
        raw_hosts = obj.get("host")
        hosts = [h for h in raw_hosts if isinstance(h, str)] if isinstance(raw_hosts, list) else []
        return cls(path=as_str(obj.get("path")), host=hosts)


@dataclass
class GrpcSettings:
    service_name: str = ""

    @classmethod
    def from_dict(cls, obj):
        obj = as_object(obj)
        if obj is None:
            return None
        return cls(service_name=as_str(obj.get("serviceName")))


@dataclass
class TlsSettings:
    server_name: str = ""

    @classmethod
    def from_dict(cls, obj):
        obj = as_object(obj)
        if obj is None:
            return None
        return cls(server_name=as_str(obj.get("serverName")))


@dataclass
class StreamSettings:
    network: str = ""
    security: str = ""
    ws: Optional[WsSettings] = None
    http: Optional[HttpSettings] = None
    grpc: Optional[GrpcSettings] = None
    tls: Optional[TlsSettings] = None
    xtls: Optional[TlsSettings] = None

    @classmethod
    def from_dict(cls, obj):
        obj = as_object(obj) or {}
        return cls(
            network=as_str(obj.get("network")),
            security=as_str(obj.get("security")),
            ws=WsSettings.from_dict(obj.get("wsSettings")),
            http=HttpSettings.from_dict(obj.get("httpSettings")),
            grpc=GrpcSettings.from_dict(obj.get("grpcSettings")),
            tls=TlsSettings.from_dict(obj.get("tlsSettings")),
            xtls=TlsSettings.from_dict(obj.get("xtlsSettings")),
        )


@dataclass(frozen=True)
class TransportSelection:
    kind: TransportKind = TransportKind.NONE
    security: SecurityKind = SecurityKind.NONE
    # Raw network string, used verbatim as the Clash "network" label.
    network: str = ""


# --- Clash output types ---

@dataclass
class WsOptions:
    path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    def to_clash(self):
        out = {}
        if self.path:
            out["path"] = self.path
        if self.headers:
            out["headers"] = dict(self.headers)
        return out


@dataclass
class H2Options:
    host: List[str] = field(default_factory=list)
    path: str = ""

    def to_clash(self):
        out = {}
        if self.host:
            out["host"] = list(self.host)
        if self.path:
            out["path"] = self.path
        return out


@dataclass
class GrpcOptions:
    service_name: str = ""

    def to_clash(self):
        if not self.service_name:
            return {}
        return {"grpc-service-name": self.service_name}


_OPTS_KEYS = {
    WsOptions: "ws-opts",
    H2Options: "h2-opts",
    GrpcOptions: "grpc-opts",
}


@dataclass
class ProxyEntry:
    """One entry of the Clash ``proxies`` list."""

    name: str
    server: str
    port: int
    uuid: str = ""
    alter_id: int = 0
    tls: bool = False
    network: str = ""
    servername: str = ""
    options: Optional[object] = None
    type: str = "vmess"
    cipher: str = "auto"
    skip_cert_verify: bool = False

    def to_clash(self):
        out = {
            "name": self.name,
            "type": self.type,
            "server": self.server,
            "port": self.port,
            "uuid": self.uuid,
            "alterId": self.alter_id,
            "cipher": self.cipher,
            "tls": self.tls,
        }
        if self.network:
            out["network"] = self.network
        if self.servername:
            out["servername"] = self.servername
        out["skip-cert-verify"] = self.skip_cert_verify
        if self.options is not None:
            opts = self.options.to_clash()
            if opts:
                out[_OPTS_KEYS[type(self.options)]] = opts
        return out
