"""Main application entry point.

Runs FastAPI with the NiceGUI chat client mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on one port.

    FastAPI handles the /api routes and /health, NiceGUI serves the
    chat client at /.
    """
    import uvicorn
    from nicegui import ui

    from lingua_relay.api.app import create_app
    from lingua_relay.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="LinguaRelay",
        favicon="🌐",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "lingua-relay-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))

    logger.info(f"Server running on http://localhost:{port}")
    logger.info("Available endpoints:")
    logger.info("- POST /api/translate (File upload and translation)")
    logger.info("- POST /api/chat (Chat with the hosted model)")
    logger.info("- GET /health (Server health check)")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
