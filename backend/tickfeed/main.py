"""
tickfeed - simulated real-time OHLC feed over WebSockets
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from tickfeed.market import FeedConfig, create_market_feed, create_stream_router

logger = logging.getLogger(__name__)

HEALTH_PATHS = ("/", "/health", "/healthz", "/cron-ping", "/alive")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_app(config: FeedConfig | None = None) -> FastAPI:
    """Build the FastAPI application around a fresh market feed."""
    feed = create_market_feed(config)
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan events for startup and shutdown
        """
        await feed.broadcaster.start()
        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        await feed.broadcaster.stop()

    app = FastAPI(title="tickfeed", lifespan=lifespan)
    app.state.feed = feed
    app.include_router(create_stream_router(feed.hub))

    async def health_check():
        """Liveness probe"""
        return {
            "status": "ok",
            "uptime_seconds": round(time.monotonic() - started, 3),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    for path in HEALTH_PATHS:
        app.add_api_route(path, health_check, methods=["GET"])

    return app


settings = FeedConfig.from_env()
logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

# Create FastAPI application (served with `uvicorn tickfeed.main:app`)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting server at %s:%d", settings.host, settings.port)

    uvicorn.run(
        "tickfeed.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
