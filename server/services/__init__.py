"""Backing logic: catalog, social graph and interaction stores."""

from .catalog_provider import CatalogProvider, InMemoryCatalogProvider, JsonCatalogProvider
from .interaction_store import (
    INTERACTION_TYPES,
    MAX_VIEWED,
    InMemoryInteractionStore,
    InteractionStore,
    JsonInteractionStore,
)
from .social_store import InMemorySocialGraphStore, JsonSocialGraphStore, SocialGraphStore

__all__ = [
    "CatalogProvider",
    "InMemoryCatalogProvider",
    "JsonCatalogProvider",
    "INTERACTION_TYPES",
    "MAX_VIEWED",
    "InteractionStore",
    "InMemoryInteractionStore",
    "JsonInteractionStore",
    "SocialGraphStore",
    "InMemorySocialGraphStore",
    "JsonSocialGraphStore",
]
