"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()

SERVICE_NAME = "Wayfare Discovery API"
SERVICE_VERSION = "1.0.0"


@router.get("/")
def root():
    state = get_state()
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "catalog": {
            "items": state.catalog.get_pools().total(),
            "trending": len(state.catalog.get_trending()),
        },
        "endpoints": {
            "discovery": [
                "/api/discovery/feed",
                "/api/discovery/itineraries",
                "/api/discovery/interaction",
                "/api/discovery/similar",
                "/api/discovery/trending/refresh",
            ],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    ok, errors = state.config.validate()
    return {
        "status": "healthy" if ok else "degraded",
        "errors": errors,
        "seasonal_enabled": state.feed_config.seasonal_enabled,
    }
