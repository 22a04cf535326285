"""Logging configuration with request-id correlation."""

import logging
import sys
from contextvars import ContextVar

# Set by RequestIDMiddleware for the lifetime of a request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    """Attach the current request id to every record as `request_id`."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging with a single stderr handler.

    Call this ONCE, very early (before first logger.info).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.addFilter(RequestIDFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
