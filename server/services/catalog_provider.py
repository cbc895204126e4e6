"""
Catalog Provider abstraction.

Supplies the five candidate pools and the stored trending list to the feed.
Implementations: in-memory (tests, request-supplied data) and JSON file.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from discovery.models.snapshots import CandidatePools

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Protocol for catalog access. Implement for a file, a database, or memory."""

    def get_pools(self) -> CandidatePools:
        """Return all candidate pools."""
        ...

    def get_trending(self) -> List[str]:
        """Return the current trending item ids."""
        ...

    def set_trending(self, item_ids: List[str]) -> None:
        """Replace the trending list (e.g. after a trending refresh)."""
        ...


class InMemoryCatalogProvider:
    """Catalog held in memory. Used for tests and as the empty default."""

    def __init__(
        self,
        pools: Optional[Union[CandidatePools, Dict]] = None,
        trending: Optional[List[str]] = None,
    ):
        if isinstance(pools, dict):
            pools = CandidatePools.model_validate(pools)
        self._pools = pools or CandidatePools()
        self._trending = list(trending or [])
        self._lock = threading.Lock()

    def get_pools(self) -> CandidatePools:
        return self._pools

    def get_trending(self) -> List[str]:
        with self._lock:
            return list(self._trending)

    def set_trending(self, item_ids: List[str]) -> None:
        with self._lock:
            self._trending = list(item_ids)


class JsonCatalogProvider(InMemoryCatalogProvider):
    """
    Catalog loaded from one JSON file:
    {"itineraries": [...], "deals": [...], "promotions": [...],
     "destinations": [...], "users": [...], "trending": [...]}
    """

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Catalog JSON not found: {self._path}")
        with open(self._path) as f:
            data = json.load(f)
        trending = data.pop("trending", [])
        super().__init__(CandidatePools.model_validate(data), trending)
        logger.info(
            "[catalog] loaded %d items and %d trending ids from %s",
            self._pools.total(), len(self._trending), self._path,
        )
