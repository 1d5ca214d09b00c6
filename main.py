"""
main.py
-------
Entry point for the coursehub HTTP service.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Build the FastAPI application with all routes.
    - Serve it with uvicorn until interrupted.
"""

import uvicorn

from api.app import create_app
from config import HTTP_HOST, HTTP_PORT
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Initialize and run the service."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the application ──────────────────────────
    app = create_app()

    # ── 3. Serve ──────────────────────────────────────────
    logger.info(f"coursehub listening on {HTTP_HOST}:{HTTP_PORT}")
    try:
        uvicorn.run(app, host=HTTP_HOST, port=HTTP_PORT, log_config=None)
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        close_pool()
        logger.info("coursehub stopped.")


if __name__ == "__main__":
    main()
