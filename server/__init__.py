"""
Wayfare Discovery Server

Usage: uvicorn server:app --reload --port 8000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .services import (
    InMemoryCatalogProvider,
    InMemoryInteractionStore,
    InMemorySocialGraphStore,
    JsonCatalogProvider,
    JsonInteractionStore,
    JsonSocialGraphStore,
)

__all__ = [
    "app",
    "create_app",
    "ServerConfig",
    "get_config",
    "reload_config",
    "InMemoryCatalogProvider",
    "InMemoryInteractionStore",
    "InMemorySocialGraphStore",
    "JsonCatalogProvider",
    "JsonInteractionStore",
    "JsonSocialGraphStore",
]
