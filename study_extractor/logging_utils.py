import os
import sys
import logging

from pythonjsonlogger import jsonlogger

_ROOT = "study_extractor"


def configure_logging(name: str = _ROOT) -> logging.Logger:
    """Attach a stdout handler to the package logger once.

    LOG_LEVEL sets the level (default INFO); LOG_FORMAT=json switches to
    JSON lines, anything else gives plain text.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
    handler = logging.StreamHandler(sys.stdout)
    if os.getenv('LOG_FORMAT', 'text') == 'json':
        fmt = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    else:
        fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger
