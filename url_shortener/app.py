#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Short links are kept in memory for the lifetime of the process, so the
service runs as a single uvicorn process.

Usage:
    python app.py

Environment variables:
    HOST - Host to bind to
    PORT - Port to listen on
    BASE_URL - Base URL for short links
    CODE_BYTES - Random bytes per short code
    MAX_COLLISION_RETRIES - Retries on short code collision
    LOG_LEVEL - Logging level
    LOG_FILE - Optional log file
    LOG_JSON - Set to 'true' for JSON log lines
"""

import signal
import sys

import uvicorn

from config import load_config
from lib.service import URLShortenerService
from lib.shortcode import ShortCodeGenerator
from lib.store import InMemoryShortLinkStore
from lib.common.logging_config import setup_logging
from web_app import create_app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Starting URL shortener service...")
    logger.debug(f"Configuration: {config.model_dump()}")

    store = InMemoryShortLinkStore(
        generator=ShortCodeGenerator(num_bytes=config.code_bytes),
        max_collision_retries=config.max_collision_retries,
    )
    service = URLShortenerService(store=store, base_url=config.base_url)
    app = create_app(service_instance=service, config=config)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )
    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting url shortener API on {config.host}:{config.port}")
        server.run()
    except SystemExit:
        # uvicorn exits on startup failures such as an address already in use
        if not server.started:
            logger.critical(f"Unable to start server on {config.host}:{config.port}")
            sys.exit(1)
        raise
    except Exception as e:
        logger.critical(f"Server error: {e}", exc_info=True)
        sys.exit(1)

    logger.info("Service stopped")


if __name__ == "__main__":
    main()
