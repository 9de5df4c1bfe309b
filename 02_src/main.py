"""Main entry point for Topicflow."""

import sys
import threading

import uvicorn
from dotenv import load_dotenv

from topicflow.api import create_fastapi_app
from topicflow.app import Application
from topicflow.config import PROJECT_ROOT, load_settings
from topicflow.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def watch_stdin(server: uvicorn.Server) -> None:
    """Ask the server to exit once stdin reaches end of file."""
    for _ in sys.stdin:
        pass
    logger.info("stdin closed, shutting down")
    server.should_exit = True


def main():
    """Run the application."""
    load_dotenv(PROJECT_ROOT / ".env")

    # Get configuration from environment
    settings = load_settings()
    setup_logging(log_level=settings.log_level)

    application = Application(
        queue_capacity=settings.queue_capacity,
        initial_config=settings.initial_config,
    )

    # Create FastAPI app
    app = create_fastapi_app(application)

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level=settings.log_level.lower(),
        )
    )

    if settings.exit_on_stdin_eof:
        threading.Thread(
            target=watch_stdin, args=(server,), name="stdin-watcher", daemon=True
        ).start()

    logger.info(
        "Serving on http://%s:%s", settings.api_host, settings.api_port
    )
    server.run()


if __name__ == "__main__":
    main()
