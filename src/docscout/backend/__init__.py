"""Search backend connectivity."""

from docscout.backend.client import create_client

__all__ = ["create_client"]
