"""Run the gateway with uvicorn."""

import logging

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("hostaway_gateway").info("Starting server on port %s", settings.port)
    uvicorn.run("hostaway_gateway.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
