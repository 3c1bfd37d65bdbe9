"""Reference clients implementing the hub's client contract."""

from capture_hub.clients.base import BaseClient
from capture_hub.clients.log_client import LoggingClient
from capture_hub.clients.memory import MemoryBackend, MemoryClient

__all__ = ["BaseClient", "LoggingClient", "MemoryBackend", "MemoryClient"]
