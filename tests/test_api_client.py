"""Tests for the requests-based transport."""

import pytest
import requests
from requests.auth import HTTPBasicAuth

from maasapi.api_client import MAASAPIClient
from maasapi.errors import ServerError, is_deserialization_error


def make_response(status_code, body=b"", reason="OK"):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = body
    return response


@pytest.fixture
def client():
    return MAASAPIClient("http://maas.example.com:5240/MAAS/", "2.0")


@pytest.fixture
def sent(client, monkeypatch):
    """Record requests and answer them from a queue of responses."""
    calls = []
    replies = []

    def fake_request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        return replies.pop(0)

    monkeypatch.setattr(client.session, "request", fake_request)
    return calls, replies


def test_api_url(client):
    assert client.api_url == "http://maas.example.com:5240/MAAS/api/2.0/"


@pytest.mark.parametrize("path, expected", [
    ("machines/", "http://maas.example.com:5240/MAAS/api/2.0/machines/"),
    ("/MAAS/api/2.0/nodes/4y3ha3/blockdevices/34/", "http://maas.example.com:5240/MAAS/api/2.0/nodes/4y3ha3/blockdevices/34/"),
])
def test_url_for(client, path, expected):
    assert client.url_for(path) == expected


def test_get_parses_json(client, sent):
    calls, replies = sent
    replies.append(make_response(200, b'[{"name": "default"}]'))
    assert client.get("zones/", params={"name": "default"}) == [{"name": "default"}]
    method, url, kwargs = calls[0]
    assert method == "GET"
    assert url == "http://maas.example.com:5240/MAAS/api/2.0/zones/"
    assert kwargs["params"] == {"name": "default"}
    assert kwargs["timeout"] == 30


def test_post_sends_op_and_form(client, sent):
    calls, replies = sent
    replies.append(make_response(200, b'{"id": 1}'))
    assert client.post("/MAAS/api/2.0/nodes/x/blockdevices/1/", op="format", params={"fs_type": "ext4"}) == {"id": 1}
    method, url, kwargs = calls[0]
    assert method == "POST"
    assert kwargs["params"] == {"op": "format"}
    assert kwargs["data"] == {"fs_type": "ext4"}


def test_empty_body(client, sent):
    calls, replies = sent
    replies.append(make_response(204, b"", reason="No Content"))
    assert client.delete("files/test/") is None
    method, url, kwargs = calls[0]
    assert method == "DELETE"
    assert url == "http://maas.example.com:5240/MAAS/api/2.0/files/test/"
    assert kwargs["params"] == {}
    assert kwargs["data"] is None


def test_only_verbs_in_use(client):
    assert not hasattr(client, "put")


def test_error_status_raises_server_error(client, sent):
    calls, replies = sent
    replies.append(make_response(405, b"wat?", reason="Method Not Allowed"))
    with pytest.raises(ServerError) as excinfo:
        client.get("machines/")
    assert excinfo.value.status_code == 405
    assert str(excinfo.value) == "ServerError: 405 Method Not Allowed (wat?)"


def test_invalid_json(client, sent):
    calls, replies = sent
    replies.append(make_response(200, b"<html>"))
    with pytest.raises(Exception) as excinfo:
        client.get("version/")
    assert is_deserialization_error(excinfo.value)


def test_network_failure_propagates(client, monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(client.session, "request", refuse)
    with pytest.raises(requests.exceptions.ConnectionError):
        client.get("version/")


def test_session_settings():
    auth = HTTPBasicAuth("user", "secret")
    client = MAASAPIClient("https://maas.example.com/MAAS", "2.0", auth=auth, verify_ssl=False, timeout=5)
    assert client.session.auth is auth
    assert client.session.verify is False
    assert client.timeout == 5
