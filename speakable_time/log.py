"""Structured logging for speakable_time.

Loggers wrap the standard library logger of the same name, so output goes
wherever the host application routes ``logging``. Without a configured
handler only warnings and errors reach stderr. The library never configures
logging itself.
"""

import logging

import structlog
from structlog.stdlib import BoundLogger


def get_logger(name: str) -> BoundLogger:
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=BoundLogger,
    )
