"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, to_utc, assume_utc
from utils.logging_setup import setup_logging, request_id_var, RequestIDFilter
