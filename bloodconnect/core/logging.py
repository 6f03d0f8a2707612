"""
Process-wide logging: stdout always, plus a rotating file outside DEBUG.

Every record carries ``request_id``; the HTTP middleware passes it via
``extra`` and anything logged outside a request shows ``N/A``.
"""
import logging
import logging.handlers
import os
import sys
from bloodconnect.core.config import settings

# Chatty libraries kept at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx")

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

class RequestIDFilter(logging.Filter):
    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = "N/A"
        return True

def _rotating_file_handler(path: str) -> logging.Handler:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )

def setup_logging(level: str = None) -> logging.Logger:
    """(Re)configure the root logger from settings and return it."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if not settings.DEBUG:
        handlers.append(_rotating_file_handler(settings.LOG_FILE))

    formatter = logging.Formatter(settings.LOG_FORMAT)
    request_id_filter = RequestIDFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(request_id_filter)

    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger()

logger = setup_logging()
