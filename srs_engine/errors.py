"""
Scheduling Errors

The engine clamps out-of-range numbers instead of rejecting them, so the
only failures it raises are programming errors at the call boundary:
an unknown response token, an algorithm tag with no registered scheduler,
or a memory-model card record missing its memory state.
"""

from typing import Optional


class SchedulingError(Exception):
    """
    Base exception for scheduling engine errors.

    Provides consistent error reporting with:
    - Error code for categorization
    - Optional details for debugging

    Example:
        raise SchedulingError("Card record is corrupt", details={"card_id": card.id})
    """

    error_code: str = "scheduling_error"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details


class InvalidResponseError(SchedulingError, ValueError):
    """
    Response token outside the fixed again/hard/good/easy vocabulary.
    """

    error_code = "invalid_response"


class UnknownAlgorithmError(SchedulingError):
    """
    No scheduler is registered for a card's algorithm tag.
    """

    error_code = "unknown_algorithm"


class MissingMemoryStateError(SchedulingError):
    """
    A memory-model card arrived without its memory-model fields.
    """

    error_code = "missing_memory_state"
