"""
Social graph store: who each user's friends are (with what they liked) and whom
they follow. Read-only from the feed's point of view.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from discovery.models.snapshots import SocialData


class SocialGraphStore(Protocol):
    """Protocol for social graph lookup."""

    def get_social_data(self, user_id: str) -> SocialData:
        """Return the user's social snapshot; empty when the user is unknown."""
        ...


class InMemorySocialGraphStore:
    """Social graph held in a dict: user_id -> {"friends": {...}, "following": [...]}."""

    def __init__(self, graph: Optional[Dict[str, Union[Dict, SocialData]]] = None):
        self._graph: Dict[str, SocialData] = {
            uid: SocialData.model_validate(v) if isinstance(v, dict) else v
            for uid, v in (graph or {}).items()
        }

    def get_social_data(self, user_id: str) -> SocialData:
        return self._graph.get(user_id) or SocialData()


class JsonSocialGraphStore(InMemorySocialGraphStore):
    """Social graph loaded from {"users": {user_id: {"friends": ..., "following": ...}}}."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Social graph JSON not found: {self._path}")
        with open(self._path) as f:
            data = json.load(f)
        super().__init__(data.get("users", data) if isinstance(data, dict) else {})
