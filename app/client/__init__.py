"""Python client for the ProAuthenticate API."""

from app.client.api import ApiClient, resolve_base_url
from app.client.session import FileSessionStore, MemorySessionStore

__all__ = ["ApiClient", "FileSessionStore", "MemorySessionStore", "resolve_base_url"]
