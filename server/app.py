"""
Wayfare Discovery: FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .routes.root import SERVICE_NAME, SERVICE_VERSION
from .state import get_state

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Root logging setup for the service (stdout, one line per record)."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    config = get_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Personalised discovery feed: reasons, scoring and feed sections",
        version=SERVICE_VERSION,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup_logging():
        state = get_state()
        ok, errors = state.config.validate()
        for error in errors:
            logger.warning("[startup] %s", error)
        logger.info(
            "[startup] %s starting: catalog=%d items, trending=%d, seasonal=%s",
            SERVICE_NAME,
            state.catalog.get_pools().total(),
            len(state.catalog.get_trending()),
            state.feed_config.seasonal_enabled,
        )

    return app


app = create_app()
