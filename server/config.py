"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from discovery.models.config import DEFAULT_CONFIG, FeedConfig

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data files. Missing paths mean "start empty" (catalog/social) or
    # "keep interactions in memory only".
    catalog_json_path: Optional[Path] = None
    social_json_path: Optional[Path] = None
    interactions_json_path: Optional[Path] = None

    # Optional JSON file with FeedConfig overrides (see FeedConfig.from_dict)
    feed_config_path: Optional[Path] = None

    # How many ids the trending refresh keeps
    trending_limit: int = 20

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_json_path=_path_env("CATALOG_JSON_PATH"),
            social_json_path=_path_env("SOCIAL_JSON_PATH"),
            interactions_json_path=_path_env("INTERACTIONS_JSON_PATH"),
            feed_config_path=_path_env("FEED_CONFIG_PATH"),
            trending_limit=int(os.getenv("TRENDING_LIMIT", "20")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        for name in ("catalog_json_path", "social_json_path", "feed_config_path"):
            path = getattr(self, name)
            if path is not None and not path.is_file():
                errors.append(f"{name} not found: {path}")

        if self.trending_limit <= 0:
            errors.append(f"trending_limit must be positive, got {self.trending_limit}")

        return len(errors) == 0, errors

    def load_feed_config(self) -> FeedConfig:
        """FeedConfig from feed_config_path merged over defaults; defaults when unset."""
        if self.feed_config_path is None:
            return DEFAULT_CONFIG
        with open(self.feed_config_path) as f:
            return FeedConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
