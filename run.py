"""Entry point for serving the list API.

Host, port and log level come from the same environment variables the
application reads (``HOST``, ``PORT``, ``LOG_LEVEL``); a ``.env`` file is
not loaded automatically, so export them or set them in the container.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from poptape_lists_api.app.core.config import settings
from poptape_lists_api.app.main import app


async def serve() -> None:
    """Run the API under uvicorn until it is stopped."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(serve())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")


if __name__ == "__main__":
    main()
