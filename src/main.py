"""Main application entry point."""

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

# Load environment variables before settings are first read
load_dotenv()

from src.api.app import app  # noqa: E402
from src.services.config import get_settings  # noqa: E402
from src.services.logging import setup_server_logging  # noqa: E402

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Rent Ledger API server")
    parser.add_argument("--host", default=settings.host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind to")
    parser.add_argument("--log-file", default=settings.log_file, help="Log file path")
    args = parser.parse_args()

    setup_server_logging(args.log_file)
    logger.info("Starting Uvicorn server on %s:%d...", args.host, args.port)

    config = uvicorn.Config(
        app=app,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    server.run()


if __name__ == "__main__":
    main()
