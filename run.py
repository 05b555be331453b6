import logging
from typing import Optional

import uvicorn

from adcrawl.api.server import create_app
from adcrawl.container import Container
from adcrawl.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def main(container: Optional[Container] = None):
    container = container or Container()
    settings = container.config()
    configure_logging(settings.get("LOG_LEVEL") or "INFO")

    app = create_app(container)
    host = settings.get("HOST") or "0.0.0.0"
    port = int(settings.get("PORT") or 8000)
    logger.info("Serving adcrawl on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == '__main__':
    main()
