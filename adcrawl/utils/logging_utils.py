import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d][%H:%M:%S"

_HANDLER_NAME = "adcrawl-stream"


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Send log records to stdout as `[date][time][logger][LEVEL] message`.

    Calling it again replaces the handler installed by the previous call.
    Unknown level names fall back to INFO.
    """
    resolved = logging.getLevelName((level or "INFO").strip().upper())
    if not isinstance(resolved, int):
        logging.warning("Unknown log level %r; using INFO", level)
        resolved = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolved)
