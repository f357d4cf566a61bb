import logging
import sys

from heartwise.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _configure() -> None:
    global _configured
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger("heartwise")
    root.setLevel(settings.LOG_LEVEL.upper())
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, nested under the 'heartwise' logger."""
    if not _configured:
        _configure()
    if name != "heartwise" and not name.startswith("heartwise."):
        name = f"heartwise.{name}"
    return logging.getLogger(name)
