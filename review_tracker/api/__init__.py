"""API client package for the pretalx REST API."""

from .client import PretalxClient, PretalxEvent

__all__ = ["PretalxClient", "PretalxEvent"]
