"""Entry point for the User Store API server.

Starts uvicorn serving ``user_store_api.app.main:app``.  Host, port,
log level and the store file are read from environment variables (see
``user_store_api.app.core.config``), e.g.::

    STORE_PATH=/var/lib/users/users.json PORT=3333 python run.py
"""
import asyncio

from uvicorn import Config, Server

from user_store_api.app.core.config import settings
from user_store_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
