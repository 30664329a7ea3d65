"""
Strict Base Models for Card Records

Card records cross two collaborator boundaries: the authoring side builds
them and the persistence side round-trips them verbatim. Strict validation
catches schema mismatches at that boundary instead of deep inside a
scheduler.

Usage:
    # Immutable records (cards, history entries, memory state)
    class Entry(StrictRecord):
        timestamp: AwareDatetime

    # Derived, read-only summaries (statistics)
    class Summary(StrictResponse):
        total: int

Architecture:
    Collaborator record → StrictRecord (extra="forbid", frozen) → Engine
    Engine → StrictResponse (extra="ignore") → Dashboard
"""

from pydantic import BaseModel, ConfigDict


class StrictRecord(BaseModel):
    """
    Base model for engine records with strict validation.

    Features:
        - extra="forbid": Unknown fields raise ValidationError
        - frozen=True: Records are never mutated in place; updates go
          through model_copy(update=...)
        - validate_default=True: Validates default values

    Example:
        >>> class Entry(StrictRecord):
        ...     name: str
        >>>
        >>> Entry(name="bonjour")  # OK
        >>> Entry(nme="bonjour")  # Raises ValidationError
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        validate_default=True,
    )


class StrictResponse(BaseModel):
    """
    Base model for derived read-only summaries.

    More lenient than StrictRecord: still enforces types but ignores
    extra fields so older dashboards keep parsing newer payloads.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_default=True,
    )
