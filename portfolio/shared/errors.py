"""
Error types and secure error handling for the portfolio data layer.

Taxonomy:
- ValidationError: caller data problem, never retried, never reaches transport
- TransportError: network/HTTP failure, raised only after retries are exhausted
- NotFoundError: referenced id is absent
- StorageError: local fallback store unreadable or corrupt
"""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base class for all data layer errors."""


class ValidationError(PortfolioError):
    def __init__(self, message: str, missing_fields: Optional[list[str]] = None):
        super().__init__(message)
        self.message = message
        self.missing_fields = list(missing_fields or [])


class TransportError(PortfolioError):
    def __init__(
        self,
        attempts: int,
        last_message: str,
        last_status: Optional[int] = None,
    ):
        super().__init__(
            f"Request failed after {attempts} attempt(s): {last_message}"
        )
        self.attempts = attempts
        self.last_status = last_status
        self.last_message = last_message


class NotFoundError(PortfolioError):
    def __init__(self, resource: str, record_id: str):
        super().__init__(f"{resource} '{record_id}' not found")
        self.resource = resource
        self.record_id = record_id


class StorageError(PortfolioError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Local store entry '{key}' is unreadable: {reason}")
        self.key = key
        self.reason = reason


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Project delete")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    error_id = str(uuid.uuid4())[:8]

    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=True
    )

    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id
