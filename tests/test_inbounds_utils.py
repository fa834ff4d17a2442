from unittest.mock import MagicMock, patch

import requests

from subpanel.config import STORAGE_API_URL
from subpanel.inbounds import utils


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = "body"
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} error")
    return response


def test_get_inbound_ok():
    with patch.object(utils.api_session, "get", return_value=_response(payload={"id": 3})) as mock_get:
        assert utils.get_inbound(3, "tok") == {"id": 3}
    url = mock_get.call_args[0][0]
    assert url == f"{STORAGE_API_URL}/inbounds/3"
    assert mock_get.call_args[1]["headers"] == {"Authorization": "Bearer tok"}


def test_get_inbound_without_token_sends_no_auth_header():
    with patch.object(utils.api_session, "get", return_value=_response(payload={"id": 3})) as mock_get:
        utils.get_inbound(3)
    assert mock_get.call_args[1]["headers"] == {}


def test_get_inbound_not_found():
    with patch.object(utils.api_session, "get", return_value=_response(404)):
        assert utils.get_inbound(3, "tok") is None


def test_get_inbound_connection_error():
    with patch.object(utils.api_session, "get", side_effect=requests.exceptions.ConnectionError("down")):
        assert utils.get_inbound(3, "tok") is None


def test_get_inbound_non_object_payload():
    with patch.object(utils.api_session, "get", return_value=_response(payload=[1, 2])):
        assert utils.get_inbound(3, "tok") is None


def test_get_inbounds():
    with patch.object(utils.api_session, "get", return_value=_response(payload=[{"id": 1}])):
        assert utils.get_inbounds("tok") == [{"id": 1}]
    with patch.object(utils.api_session, "get", return_value=_response(500)):
        assert utils.get_inbounds("tok") is None


def test_writes():
    with patch.object(utils.api_session, "request", return_value=_response(200)) as mock_req:
        assert utils.add_inbound("tok", {"port": 1}) == (True, None)
        assert utils.update_inbound("tok", 2, {"port": 1}) == (True, None)
        assert utils.del_inbound("tok", 2) == (True, None)
    methods = [(c.args[0], c.args[1]) for c in mock_req.call_args_list]
    assert methods == [
        ("post", f"{STORAGE_API_URL}/inbounds"),
        ("put", f"{STORAGE_API_URL}/inbounds/2"),
        ("delete", f"{STORAGE_API_URL}/inbounds/2"),
    ]


def test_write_not_found_and_timeout():
    with patch.object(utils.api_session, "request", return_value=_response(404)):
        assert utils.del_inbound("tok", 2) == (False, utils.INBOUND_NOT_FOUND)
    with patch.object(utils.api_session, "request", side_effect=requests.exceptions.Timeout("slow")):
        ok, message = utils.update_inbound("tok", 2, {})
    assert ok is False
    assert message == "Failed updating inbound 2."
