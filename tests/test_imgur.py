"""Tests for the Imgur upload client, using a fake requests session."""

import base64

import pytest
import requests

from pokerboard.board import UploadError
from pokerboard.imgur import ImgurClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_upload_returns_link_and_sends_base64():
    session = FakeSession(FakeResponse(payload={
        "success": True,
        "status": 200,
        "data": {"id": "abc123", "link": "https://i.imgur.com/abc123.jpg"},
    }))
    client = ImgurClient(client_id="cid", session=session)

    url = client.upload_image(b"\xff\xd8jpeg", title="flop")

    assert url == "https://i.imgur.com/abc123.jpg"
    method, called_url, kwargs = session.calls[0]
    assert method == "POST"
    assert called_url == "https://api.imgur.com/3/image"
    assert kwargs["headers"] == {"Authorization": "Client-ID cid"}
    assert base64.b64decode(kwargs["data"]["image"]) == b"\xff\xd8jpeg"
    assert kwargs["data"]["type"] == "base64"
    assert kwargs["data"]["title"] == "flop"


def test_client_id_from_environment(monkeypatch):
    monkeypatch.setenv("IMGUR_CLIENT_ID", "from-env")

    assert ImgurClient(session=FakeSession()).client_id == "from-env"


def test_missing_client_id(monkeypatch):
    monkeypatch.delenv("IMGUR_CLIENT_ID", raising=False)

    with pytest.raises(UploadError, match="IMGUR_CLIENT_ID"):
        ImgurClient()


def test_api_error_raises_upload_error():
    session = FakeSession(FakeResponse(status_code=400, reason="Bad Request", payload={
        "success": False,
        "status": 400,
        "data": {"error": "Image format not supported"},
    }))
    client = ImgurClient(client_id="cid", session=session)

    with pytest.raises(UploadError, match="Image format not supported") as exc_info:
        client.upload_image(b"data")
    assert exc_info.value.status_code == 400


def test_transport_failure_raises_upload_error():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    client = ImgurClient(client_id="cid", session=session)

    with pytest.raises(UploadError, match="connection refused"):
        client.upload_image(b"data")
    assert len(session.calls) == 1


def test_non_json_response_raises_upload_error():
    session = FakeSession(FakeResponse(status_code=502, reason="Bad Gateway"))
    client = ImgurClient(client_id="cid", session=session)

    with pytest.raises(UploadError) as exc_info:
        client.upload_image(b"data")
    assert exc_info.value.status_code == 502


def test_missing_link_raises_upload_error():
    session = FakeSession(FakeResponse(payload={"success": True, "data": {"id": "abc"}}))
    client = ImgurClient(client_id="cid", session=session)

    with pytest.raises(UploadError, match="link"):
        client.upload_image(b"data")
