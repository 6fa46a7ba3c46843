"""
Postboard Client — HTTP API Wrapper
=====================================

What:  One method per backend endpoint, on top of httpx.
How:   login() stores the session token; later calls send it as a bearer
       token. Non-2xx responses raise PostboardAPIError carrying the
       backend's `error` code and `message`.

Usage:
    with PostboardClient("http://localhost:4000") as api:
        api.register("ada@example.com", "secret-pw")
        api.login("ada@example.com", "secret-pw")
        post = api.create_post("Hello", "First post")
"""

from typing import Any, Dict, List, Optional

import httpx

from postboard_client.endpoints import BASE_URL, build_endpoints


class PostboardAPIError(Exception):
    """A request the backend answered with an error status."""

    def __init__(self, status_code: int, error: str, message: str):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"{status_code} {error}: {message}")


class PostboardClient:
    """
    Args:
        base_url: backend base URL; defaults to POSTBOARD_API_BASE_URL
        http_client: pre-built httpx.Client (tests pass one with a mock transport)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        base_url = base_url if base_url is not None else BASE_URL
        if not base_url:
            raise ValueError("No API base URL: pass base_url or set POSTBOARD_API_BASE_URL")
        self.endpoints = build_endpoints(base_url)
        self._http = http_client or httpx.Client(timeout=timeout)
        self.token: Optional[str] = None

    # ── Session ───────────────────────────────────────────────────────────

    def register(self, email: str, password: str, name: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"email": email, "password": password}
        if name is not None:
            payload["name"] = name
        return self._request("POST", self.endpoints["REGISTER"], json=payload)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request(
            "POST", self.endpoints["LOGIN"], json={"email": email, "password": password}
        )
        self.token = data["access_token"]
        return data

    def logout(self) -> None:
        self.token = None

    # ── Posts ─────────────────────────────────────────────────────────────

    def my_posts(self) -> List[Dict[str, Any]]:
        return self._request("GET", self.endpoints["MYPOSTS"], auth=True)

    def create_post(self, title: str, body: str) -> Dict[str, Any]:
        return self._request(
            "POST", self.endpoints["CREATEPOST"], json={"title": title, "body": body}, auth=True
        )

    def update_post(
        self, post_id: str, title: Optional[str] = None, body: Optional[str] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": str(post_id)}
        if title is not None:
            payload["title"] = title
        if body is not None:
            payload["body"] = body
        return self._request("PUT", self.endpoints["UPDATEPOST"], json=payload, auth=True)

    def delete_post(self, post_id: str) -> Dict[str, Any]:
        return self._request(
            "DELETE", self.endpoints["DELETEPOST"], json={"id": str(post_id)}, auth=True
        )

    # ── Plumbing ──────────────────────────────────────────────────────────

    def _request(self, method: str, url: str, json: Any = None, auth: bool = False) -> Any:
        headers = {}
        if auth:
            if not self.token:
                raise PostboardAPIError(401, "unauthorized", "Not logged in")
            headers["Authorization"] = f"Bearer {self.token}"

        response = self._http.request(method, url, json=json, headers=headers)
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        raise PostboardAPIError(
            response.status_code,
            body.get("error", "http_error"),
            body.get("message", response.reason_phrase),
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PostboardClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
