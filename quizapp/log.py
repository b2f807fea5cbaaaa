import logging
import sys

from quizapp.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger("quizapp")
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.LOG_LEVEL))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger under the service's logging hierarchy.

    Parameters:
        name (str): Usually the calling module's __name__.

    Returns:
        logging.Logger: The configured logger.
    """
    _configure()
    return logging.getLogger(name)
