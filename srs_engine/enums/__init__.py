"""
Centralized enum definitions.

Usage:
    from srs_engine.enums import CardStatus, ReviewResponse, Algorithm
"""

from srs_engine.enums.learning import (
    Algorithm,
    CardStatus,
    ContentSourceType,
    MemoryPhase,
    ReviewResponse,
)

__all__ = [
    "Algorithm",
    "CardStatus",
    "ContentSourceType",
    "MemoryPhase",
    "ReviewResponse",
]
