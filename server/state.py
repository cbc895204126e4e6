"""Application state: feed config and the catalog, social and interaction stores."""

import logging
from typing import Optional

from discovery.models.config import FeedConfig

from .config import ServerConfig, get_config
from .services import (
    CatalogProvider,
    InMemoryCatalogProvider,
    InMemorySocialGraphStore,
    InMemoryInteractionStore,
    InteractionStore,
    JsonCatalogProvider,
    JsonInteractionStore,
    JsonSocialGraphStore,
    SocialGraphStore,
)

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self.feed_config: FeedConfig = config.load_feed_config()

        self.catalog: CatalogProvider = self._create_catalog(config)
        self.social_store: SocialGraphStore = self._create_social_store(config)
        self.interaction_store: InteractionStore = self._create_interaction_store(config)
        logger.info(
            "[startup] Catalog: %s, social graph: %s, interactions: %s",
            type(self.catalog).__name__,
            type(self.social_store).__name__,
            type(self.interaction_store).__name__,
        )

    def _create_catalog(self, config: ServerConfig) -> CatalogProvider:
        """JSON catalog when CATALOG_JSON_PATH is set, else an empty in-memory one."""
        if config.catalog_json_path:
            return JsonCatalogProvider(config.catalog_json_path)
        return InMemoryCatalogProvider()

    def _create_social_store(self, config: ServerConfig) -> SocialGraphStore:
        if config.social_json_path:
            return JsonSocialGraphStore(config.social_json_path)
        return InMemorySocialGraphStore()

    def _create_interaction_store(self, config: ServerConfig) -> InteractionStore:
        if config.interactions_json_path:
            return JsonInteractionStore(config.interactions_json_path)
        return InMemoryInteractionStore()


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (None forces a rebuild from config on next access)."""
    global _state
    _state = state
