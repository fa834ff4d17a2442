"""Shared fixtures for the subpanel test-suite."""

import json

import pytest

from subpanel.app import app as flask_app
from subpanel.core.restart import restart_flag


def make_inbound(**overrides):
    """Storage-API shaped inbound (Scenario A defaults)."""
    inbound = {
        "id": 7,
        "protocol": "vmess",
        "remark": "srv1",
        "port": 443,
        "speedIp": "1.2.3.4",
        "speedPort": 0,
        "settings": json.dumps({"clients": [{"id": "abc-123", "alterId": 0}]}),
        "streamSettings": json.dumps({
            "network": "ws",
            "security": "tls",
            "wsSettings": {"path": "/ws", "headers": {"Host": "example.com"}},
            "tlsSettings": {"serverName": "example.com"},
        }),
    }
    inbound.update(overrides)
    return inbound


@pytest.fixture
def inbound_factory():
    return make_inbound


@pytest.fixture
def app():
    flask_app.config.update({"TESTING": True})
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    with client.session_transaction() as sess:
        sess["token"] = "test-token"
        sess["username"] = "admin"
    return client


@pytest.fixture(autouse=True)
def clear_restart_flag():
    restart_flag.is_need_restart_and_set_false()
    yield
    restart_flag.is_need_restart_and_set_false()
