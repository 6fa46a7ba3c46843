"""
Postboard Client — Endpoint Constants & Wrapper Tests
=======================================================

How:  PostboardClient talks to an httpx.MockTransport that records requests
      and answers like the backend would.
"""

import importlib
import json

import httpx
import pytest

from postboard_client import endpoints
from postboard_client.api import PostboardAPIError, PostboardClient


class TestEndpoints:

    def test_build_endpoints(self):
        urls = endpoints.build_endpoints("https://api.example.com/")
        assert urls["REGISTER"] == "https://api.example.com/api/user/"
        assert urls["LOGIN"] == "https://api.example.com/api/user/login"
        assert urls["MYPOSTS"] == "https://api.example.com/api/user/myPosts"
        assert urls["CREATEPOST"] == "https://api.example.com/api/post/create"
        assert urls["UPDATEPOST"] == "https://api.example.com/api/post/update"
        assert urls["DELETEPOST"] == "https://api.example.com/api/post/delete"

    def test_constants_follow_environment(self, monkeypatch):
        monkeypatch.setenv("POSTBOARD_API_BASE_URL", "http://backend:4000")
        try:
            module = importlib.reload(endpoints)
            assert module.BASE_URL == "http://backend:4000"
            assert module.LOGIN == "http://backend:4000/api/user/login"
            assert module.DELETEPOST == "http://backend:4000/api/post/delete"
        finally:
            monkeypatch.delenv("POSTBOARD_API_BASE_URL")
            importlib.reload(endpoints)


class FakeBackend:
    """Minimal stand-in for the server: records calls, serves canned replies."""

    def __init__(self):
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, request.headers, body))

        if request.url.path == "/api/user/login":
            if body["password"] != "secret-pw":
                return httpx.Response(
                    401, json={"error": "invalid_credentials", "message": "Invalid email or password"}
                )
            return httpx.Response(200, json={"access_token": "tok-1", "token_type": "bearer"})
        if request.url.path == "/api/user/myPosts":
            return httpx.Response(200, json=[])
        if request.url.path == "/api/post/delete":
            return httpx.Response(404, json={"error": "not_found", "message": "post not found"})
        if request.url.path == "/api/post/update" and body.get("title") == "explode":
            return httpx.Response(502, json=["upstream", "down"])
        return httpx.Response(200, json={"ok": True})


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    http = httpx.Client(transport=httpx.MockTransport(backend))
    with PostboardClient("http://backend:4000", http_client=http) as api:
        yield api


class TestPostboardClient:

    def test_requires_base_url(self, monkeypatch):
        monkeypatch.setattr("postboard_client.api.BASE_URL", "")
        with pytest.raises(ValueError):
            PostboardClient()

    def test_login_stores_token_and_sends_it(self, client, backend):
        client.login("ada@example.com", "secret-pw")
        assert client.my_posts() == []

        method, path, headers, _ = backend.calls[-1]
        assert (method, path) == ("GET", "/api/user/myPosts")
        assert headers["Authorization"] == "Bearer tok-1"

    def test_auth_call_without_login(self, client, backend):
        with pytest.raises(PostboardAPIError) as excinfo:
            client.create_post("Hello", "World")
        assert excinfo.value.status_code == 401
        assert backend.calls == []

    def test_update_sends_only_given_fields(self, client, backend):
        client.login("ada@example.com", "secret-pw")
        client.update_post("abc", title="New")

        method, path, _, body = backend.calls[-1]
        assert (method, path) == ("PUT", "/api/post/update")
        assert body == {"id": "abc", "title": "New"}

    def test_error_response_raises(self, client):
        client.login("ada@example.com", "secret-pw")
        with pytest.raises(PostboardAPIError) as excinfo:
            client.delete_post("abc")
        assert excinfo.value.status_code == 404
        assert excinfo.value.error == "not_found"

    def test_error_body_that_is_not_an_object(self, client):
        client.login("ada@example.com", "secret-pw")
        with pytest.raises(PostboardAPIError) as excinfo:
            client.update_post("abc", title="explode")
        assert excinfo.value.status_code == 502
        assert excinfo.value.error == "http_error"

    def test_bad_login(self, client):
        with pytest.raises(PostboardAPIError) as excinfo:
            client.login("ada@example.com", "wrong")
        assert excinfo.value.error == "invalid_credentials"
        assert client.token is None
