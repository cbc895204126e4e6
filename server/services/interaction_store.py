"""
Interaction store.

Records user interactions (view, save, like, share, comment, search) and derives
from them the two things the discovery feed needs: a per-user preference snapshot
and per-item engagement metrics for the trending refresh.
Implementations: in-memory (default, tests) and JSON file (single-node persistence).
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from pydantic import ValidationError

from discovery.models.metrics import ItemMetrics
from discovery.models.snapshots import UserPreferences

logger = logging.getLogger(__name__)

INTERACTION_TYPES = ("view", "save", "like", "share", "comment", "search")

# Most recent views kept per user
MAX_VIEWED = 100

# interaction type -> behavior list it feeds
_BEHAVIOR_LISTS = {
    "view": "viewed",
    "save": "saved",
    "like": "liked",
    "search": "searched",
}

# interaction type -> ItemMetrics counter it increments
_METRIC_FIELDS = {
    "view": "view_count",
    "save": "save_count",
    "like": "like_count",
    "share": "share_count",
    "comment": "comment_count",
}

# Interactions that count as a category preference
_CATEGORY_SIGNALS = ("like", "save")


def _empty_behavior() -> Dict[str, List[str]]:
    return {"viewed": [], "saved": [], "liked": [], "searched": [], "categories": []}


class InteractionStore(Protocol):
    """Protocol for interaction read/write."""

    def record(
        self,
        user_id: Optional[str],
        item_id: str,
        interaction_type: str,
        category: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> Dict:
        """Persist one interaction. Raises ValueError for an unknown interaction_type."""
        ...

    def get_preferences(self, user_id: str) -> UserPreferences:
        """Preference snapshot built from the user's recorded interactions."""
        ...

    def get_metrics(self) -> List[ItemMetrics]:
        """Engagement counters for every item that has been interacted with."""
        ...

    def reset_user(self, user_id: str) -> None:
        """Forget a user's behavior (item metrics are kept)."""
        ...


class InMemoryInteractionStore:
    """
    Interaction store held in memory.

    Behavior lists are most-recent-first and hold each item once; the viewed list
    keeps the latest MAX_VIEWED ids.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._behavior: Dict[str, Dict[str, List[str]]] = {}
        self._metrics: Dict[str, ItemMetrics] = {}

    def record(
        self,
        user_id: Optional[str],
        item_id: str,
        interaction_type: str,
        category: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> Dict:
        if interaction_type not in INTERACTION_TYPES:
            raise ValueError(
                f"interaction_type must be one of: {', '.join(INTERACTION_TYPES)}"
            )
        timestamp = timestamp or datetime.now(timezone.utc).isoformat()
        with self._lock:
            self._update_metrics(item_id, interaction_type, timestamp)
            if user_id:
                self._update_behavior(user_id, item_id, interaction_type, category)
            self._after_write()
        logger.debug("[interactions] %s user=%s item=%s", interaction_type, user_id, item_id)
        return {
            "user_id": user_id,
            "item_id": item_id,
            "type": interaction_type,
            "category": category,
            "timestamp": timestamp,
        }

    def _update_metrics(self, item_id: str, interaction_type: str, timestamp: str) -> None:
        field = _METRIC_FIELDS.get(interaction_type)
        if field is None:
            return
        metrics = self._metrics.get(item_id) or ItemMetrics(item_id=item_id)
        setattr(metrics, field, getattr(metrics, field) + 1)
        metrics.updated_at = timestamp
        self._metrics[item_id] = metrics

    def _update_behavior(
        self,
        user_id: str,
        item_id: str,
        interaction_type: str,
        category: Optional[str],
    ) -> None:
        behavior = self._behavior.setdefault(user_id, _empty_behavior())
        list_name = _BEHAVIOR_LISTS.get(interaction_type)
        if list_name is not None and item_id not in behavior[list_name]:
            updated = [item_id] + behavior[list_name]
            if list_name == "viewed":
                updated = updated[:MAX_VIEWED]
            behavior[list_name] = updated
        if category and interaction_type in _CATEGORY_SIGNALS:
            behavior["categories"].append(category)

    def _after_write(self) -> None:
        """Hook for persistent subclasses; called with the lock held."""

    def get_preferences(self, user_id: str) -> UserPreferences:
        with self._lock:
            behavior = self._behavior.get(user_id) or _empty_behavior()
            return UserPreferences(
                likes=list(behavior["liked"]),
                searches=list(behavior["searched"]),
                views=list(behavior["viewed"]),
                categories=list(behavior["categories"]),
            )

    def get_metrics(self) -> List[ItemMetrics]:
        with self._lock:
            return [m.model_copy() for m in self._metrics.values()]

    def reset_user(self, user_id: str) -> None:
        with self._lock:
            self._behavior.pop(user_id, None)
            self._after_write()


class JsonInteractionStore(InMemoryInteractionStore):
    """Interaction store persisted to a JSON file after every write."""

    def __init__(self, path: Union[Path, str]):
        super().__init__()
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("[interactions] could not read %s: %s; starting empty", self._path, e)
            return
        if not isinstance(data, dict):
            logger.warning("[interactions] %s is not a JSON object; starting empty", self._path)
            return
        for user_id, behavior in (data.get("behavior") or {}).items():
            merged = _empty_behavior()
            merged.update({k: list(v) for k, v in behavior.items() if k in merged})
            self._behavior[user_id] = merged
        for m in data.get("metrics") or []:
            try:
                metrics = ItemMetrics.model_validate(m)
            except ValidationError as e:
                logger.warning("[interactions] skipping bad metrics row in %s: %s", self._path, e)
                continue
            self._metrics[metrics.item_id] = metrics

    def _after_write(self) -> None:
        """Write to a temp file in the same directory, then swap it in."""
        out = {
            "behavior": self._behavior,
            "metrics": [m.model_dump() for m in self._metrics.values()],
        }
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(out, f, indent=2)
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
