"""
Postboard Client — API Endpoint Constants
===========================================

What:  The URLs of every backend endpoint, built from one base URL.
Where the base URL comes from: the POSTBOARD_API_BASE_URL environment
variable (e.g. "https://api.example.com"); it is never hardcoded.

Module constants are resolved once at import. Code that talks to more than
one backend (or tests) uses build_endpoints(base_url) instead.
"""

import os
from typing import Dict

BASE_URL_ENV = "POSTBOARD_API_BASE_URL"

# Paths relative to the base URL
REGISTER_PATH = "/api/user/"
LOGIN_PATH = "/api/user/login"
MYPOSTS_PATH = "/api/user/myPosts"
CREATEPOST_PATH = "/api/post/create"
UPDATEPOST_PATH = "/api/post/update"
DELETEPOST_PATH = "/api/post/delete"
HEALTH_PATH = "/health"


def build_endpoints(base_url: str) -> Dict[str, str]:
    """Map endpoint name → absolute URL for the given base URL."""
    base = base_url.rstrip("/")
    return {
        "REGISTER": f"{base}{REGISTER_PATH}",  # register user
        "LOGIN": f"{base}{LOGIN_PATH}",  # log in, returns the session token
        "MYPOSTS": f"{base}{MYPOSTS_PATH}",  # caller's posts
        "CREATEPOST": f"{base}{CREATEPOST_PATH}",  # logged-in users only (POST)
        "UPDATEPOST": f"{base}{UPDATEPOST_PATH}",  # update one post (PUT)
        "DELETEPOST": f"{base}{DELETEPOST_PATH}",  # delete one post (DELETE)
        "HEALTH": f"{base}{HEALTH_PATH}",
    }


BASE_URL = os.environ.get(BASE_URL_ENV, "").rstrip("/")

_endpoints = build_endpoints(BASE_URL)

# auth urls
REGISTER = _endpoints["REGISTER"]
LOGIN = _endpoints["LOGIN"]

# user url
MYPOSTS = _endpoints["MYPOSTS"]

# post urls
CREATEPOST = _endpoints["CREATEPOST"]
UPDATEPOST = _endpoints["UPDATEPOST"]
DELETEPOST = _endpoints["DELETEPOST"]
