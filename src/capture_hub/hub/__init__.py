"""Hub package: layer stack, capture dispatch and ambient lookup."""

from capture_hub.hub.current import get_current_hub, get_main_hub, make_main, use_hub
from capture_hub.hub.dispatch import AsyncDispatcher
from capture_hub.hub.hub import API_VERSION, EVENT_ID_HINT_KEY, Hub
from capture_hub.hub.layer import Layer

__all__ = [
    "API_VERSION",
    "EVENT_ID_HINT_KEY",
    "AsyncDispatcher",
    "Hub",
    "Layer",
    "get_current_hub",
    "get_main_hub",
    "make_main",
    "use_hub",
]
