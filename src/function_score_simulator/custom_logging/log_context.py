"""Custom logging context to include the simulated field name in log messages."""

import logging
from contextvars import ContextVar
from typing import Optional

from function_score_simulator.config import settings

# Store the field currently being simulated in a context variable.
# ContextVar is context-safe.
simulation_field_context: ContextVar[Optional[str]] = ContextVar("simulation_field", default=None)


class ContextFilter(logging.Filter):
    """Injects the simulated field name into log records if present."""

    def filter(self, record):
        """Prefixes the record message with the current simulation field.

        Args:
            record (logging.LogRecord): The log record to modify.

        Returns:
            bool: Always returns True.
        """
        field_name = simulation_field_context.get()
        if field_name:
            record.msg = f"[{field_name}] {record.msg}"
        return True


def setup_logging():
    """Call this once at app startup."""
    root_logger = logging.getLogger()

    # Clear any existing handlers (prevents duplicates)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL)
