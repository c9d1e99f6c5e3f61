"""Entry point for the Users API.

Serves the FastAPI application with uvicorn on the host and port from
the ``HOST`` and ``PORT`` environment variables (or a ``.env`` file in
the project root).  ``DATABASE_URL`` selects the SQLite database file.

Usage:
    python run.py
"""
import asyncio
import logging

from fastapi import FastAPI
from uvicorn import Config, Server

from users_api.app.core.config import settings
from users_api.app.main import app as default_app

logger = logging.getLogger("users_api")


async def main(app: FastAPI = default_app, host: str = settings.host, port: int = settings.port) -> None:
    """Serve ``app`` until interrupted.

    If the port cannot be bound uvicorn exits the process with status 1.
    """
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logger.info("Starting server on %s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
