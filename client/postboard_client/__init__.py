"""Postboard client: endpoint constants and a small HTTP wrapper."""

from postboard_client.api import PostboardAPIError, PostboardClient
from postboard_client.endpoints import build_endpoints

__all__ = ["PostboardAPIError", "PostboardClient", "build_endpoints"]
