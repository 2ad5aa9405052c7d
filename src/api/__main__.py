"""Entry point for running the Bookmarks API server."""
import logging

import uvicorn

from core.config import get_settings


def main() -> None:
    """Run the API with uvicorn using host/port from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
