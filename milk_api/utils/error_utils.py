import logging
from typing import Any, Optional

from fastapi.exceptions import RequestValidationError

logger = logging.getLogger(__name__)


class DeliveryNotFoundError(Exception):
    """No row matched the user (and target date) of an update or delete."""

    status_code = 404

    def __init__(self, user: Any, target_date: Optional[Any] = None):
        self.user = user
        self.target_date = target_date
        if target_date:
            message = f'No entry found for user "{user}" on date "{target_date}"'
        else:
            message = f'No entries found for user "{user}"'
        super().__init__(message)


def log_error(message: str, exc_info=False):
    """Logs an error message, optionally including exception details."""
    logger.error(f"ERROR: {message}", exc_info=exc_info)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Flattens pydantic validation errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request body"
