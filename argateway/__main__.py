import logging
import sys

import uvicorn

from argateway.config import settings
from argateway.errors import KeyInvalid, KeyMissing
from argateway.main import app
from argateway.state import build_state

logger = logging.getLogger("argateway")


def main() -> None:
    # The key is loaded before uvicorn binds, so a bad keystore never opens the port.
    try:
        app.state.gateway = build_state(settings)
    except (KeyMissing, KeyInvalid) as exc:
        logger.critical("Cannot start gateway: %s", exc)
        sys.exit(1)

    logger.info("Server listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
