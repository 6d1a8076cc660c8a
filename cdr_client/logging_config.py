"""
Logging setup for applications embedding cdr_client.

The library itself only creates loggers under "cdr-client". Call
setup_logging() from the application if you want them printed.
"""

import logging
import sys
from typing import IO, Optional, Union

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "cdr-client"

TEXT_FORMAT = '%(asctime)s | %(levelname)s | [%(name)s] %(message)s'
JSON_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s %(lineno)d %(funcName)s'


def setup_logging(
    level: Union[int, str] = "INFO",
    json_format: bool = False,
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Attach a single stream handler to the cdr-client logger.

    ARGS:
        level: Logger level (name or number)
        json_format: Emit structured JSON lines instead of plain text
        stream: Output stream (default: sys.stdout)

    RETURNS:
        The configured "cdr-client" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    if json_format:
        formatter = jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt='%H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
