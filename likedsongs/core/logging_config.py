import logging
import os
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Third-party loggers that are too chatty at INFO
NOISY_LIBRARY_LOGGERS = ("urllib3", "requests", "openai", "httpx", "httpcore")

_HANDLER_NAME = "liked_songs_stdout"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Send application logs to stdout.

    `level` may be a logging constant or a name ("DEBUG"); when omitted the
    LOG_LEVEL environment variable is used, falling back to INFO. Calling this
    again only changes the level.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)
