"""Revision schemas: one immutable state transition in a fact's history.

Revisions form an append-only ledger per fact. The initial revision is the
only one without a previous value; every later revision records the value it
replaced. Source attribution is inlined on each revision so the history keeps
the citation as it was made, independent of the outlet registry.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ledger_system.data_management.schemas.source_schema import SourceTier


class RevisionType(str, Enum):
    """Nature of a state transition.

    INITIAL: First recorded state of the fact (no previous value)
    UPDATE: Routine change of value
    CORRECTION: Earlier reporting was wrong
    ESCALATION: Situation intensified
    RESOLUTION: Situation concluded
    """

    INITIAL = "initial"
    UPDATE = "update"
    CORRECTION = "correction"
    ESCALATION = "escalation"
    RESOLUTION = "resolution"


class RevisionCreate(BaseModel):
    """Revision attributes supplied by a writer.

    Attributes:
        previous_value: Value being replaced. None only for the initial revision.
        new_value: Value after this revision.
        delta: Short human summary of the change.
        why_it_matters: Analytical context.
        revision_type: Nature of the transition.
        source_name: Outlet cited for this revision.
        source_url: Optional URL of the citation.
        source_tier: Tier of the citation.
        timestamp: When the change happened. Defaults to write time.
    """

    previous_value: Optional[str] = None
    new_value: str = Field(..., min_length=1)
    delta: str = Field(..., min_length=1)
    why_it_matters: str = Field(..., min_length=1)
    revision_type: RevisionType = RevisionType.UPDATE
    source_name: str = Field(..., min_length=1)
    source_url: Optional[str] = None
    source_tier: SourceTier = SourceTier.REPORTING
    timestamp: Optional[datetime] = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Store every time in UTC; naive values are taken as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "previous_value": "4.50-4.75%",
                    "new_value": "4.25-4.50%",
                    "delta": "Third consecutive 25bp cut",
                    "why_it_matters": "Completes a 75bp easing cycle.",
                    "revision_type": "update",
                    "source_name": "Federal Reserve",
                    "source_tier": "primary",
                }
            ]
        }
    }


class RevisionSource(BaseModel):
    """Citation inlined on a timeline entry."""

    name: str
    url: Optional[str] = None
    tier: SourceTier

    model_config = {"frozen": True}


class TimelineEntry(BaseModel):
    """One revision as shown in a fact's timeline (newest first)."""

    id: str
    timestamp: datetime
    previous_value: Optional[str] = None
    new_value: str
    delta: str
    why_it_matters: str
    revision_type: RevisionType
    source: RevisionSource

    model_config = {"frozen": True}
