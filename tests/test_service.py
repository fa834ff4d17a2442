import json

import pytest
import yaml

from subpanel.subscription import (
    InboundRecord,
    InvalidIdentifier,
    MissingAddress,
    UnsupportedProtocol,
    generate_clash_subscription,
    parse_inbound_id,
)


@pytest.mark.parametrize("raw, expected", [
    ("7", 7), ("007", 7), ("-3", -3), ("+4", 4),
    ("9223372036854775807", 2 ** 63 - 1), ("-9223372036854775808", -(2 ** 63)),
])
def test_parse_inbound_id(raw, expected):
    assert parse_inbound_id(raw) == expected


@pytest.mark.parametrize("raw", [
    "", "abc", "1.0", "1e3", "0x1f", " 12 ", "١٢", None,
    "9" * 5000, "9223372036854775808", "-9223372036854775809",
])
def test_parse_inbound_id_rejects(raw):
    with pytest.raises(InvalidIdentifier):
        parse_inbound_id(raw)


def test_generate_h2_subscription(inbound_factory):
    stream = json.dumps({
        "network": "http",
        "security": "xtls",
        "httpSettings": {"path": "/h2", "host": ["", "a.com", "", "b.com"]},
        "xtlsSettings": {"serverName": "x.example"},
    })
    record = InboundRecord.from_dict(inbound_factory(streamSettings=stream))
    subscription = generate_clash_subscription(record)

    proxy = yaml.safe_load(subscription.body)["proxies"][0]
    assert proxy["network"] == "http"
    assert proxy["tls"] is True
    assert proxy["servername"] == "x.example"
    assert proxy["h2-opts"] == {"host": ["a.com", "b.com"], "path": "/h2"}
    assert subscription.filename == "clash_srv1.yaml"


def test_generate_tcp_has_no_option_block(inbound_factory):
    stream = json.dumps({"network": "tcp", "security": "none", "tcpSettings": {}})
    proxy = yaml.safe_load(
        generate_clash_subscription(InboundRecord.from_dict(inbound_factory(streamSettings=stream))).body
    )["proxies"][0]
    assert proxy["network"] == "tcp"
    assert not {"ws-opts", "h2-opts", "grpc-opts"} & set(proxy)


def test_generate_is_idempotent(inbound_factory):
    record = InboundRecord.from_dict(inbound_factory())
    assert generate_clash_subscription(record) == generate_clash_subscription(record)


def test_generate_propagates_caller_errors(inbound_factory):
    with pytest.raises(UnsupportedProtocol):
        generate_clash_subscription(InboundRecord.from_dict(inbound_factory(protocol="trojan")))
    with pytest.raises(MissingAddress):
        generate_clash_subscription(InboundRecord.from_dict(inbound_factory(speedIp="")))


def test_record_from_dict_tolerates_wrong_types():
    record = InboundRecord.from_dict({"id": "7", "port": 443.0, "speedPort": None, "remark": 5})
    assert record == InboundRecord(id=0, port=443, speed_port=0, remark="")
