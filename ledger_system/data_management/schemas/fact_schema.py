"""Fact schemas - the aggregate root and its hydrated read model.

A fact is a tracked real-world claim with a current value and a full change
history. The current value, confidence and importance on the fact are an
explicitly written projection: writers state every field they change, and
nothing is derived from the revision ledger implicitly.

Usage:
    fact = FactCreate(
        headline="Federal Funds Rate",
        current_value="4.25-4.50% (held)",
        category=Category.ECONOMY,
    )
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ledger_system.config.settings import settings
from ledger_system.data_management.schemas.revision_schema import TimelineEntry
from ledger_system.data_management.schemas.source_schema import FactSourceView


class Category(str, Enum):
    """Topic area a fact belongs to."""

    ECONOMY = "economy"
    GEOPOLITICS = "geopolitics"
    TECHNOLOGY = "technology"
    SCIENCE = "science"
    HEALTH = "health"
    CLIMATE = "climate"
    LEGAL = "legal"
    SECURITY = "security"


class Importance(str, Enum):
    """Editorial urgency of a fact."""

    BREAKING = "breaking"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Confidence(str, Enum):
    """How settled the current value is.

    CONFIRMED: Corroborated by primary or wire sources
    DEVELOPING: Still moving, single-source or early reporting
    DISPUTED: Credible sources disagree
    RETRACTED: Previously reported value withdrawn
    """

    CONFIRMED = "confirmed"
    DEVELOPING = "developing"
    DISPUTED = "disputed"
    RETRACTED = "retracted"


class FactCreate(BaseModel):
    """Fact attributes supplied on creation.

    Attributes:
        headline: Short name of the tracked claim.
        current_value: Value shown on the fact. Supplied by the writer, not
            derived from the initial revision.
        category: Topic area.
        importance: Editorial urgency.
        confidence: How settled the value is.
        tags: Ordered free-form tags.
        last_updated: Optional explicit timestamp (seeding). Defaults to now.
    """

    headline: str = Field(..., min_length=1)
    current_value: str = Field(..., min_length=1)
    category: Category
    importance: Importance = Importance.MEDIUM
    confidence: Confidence = Confidence.DEVELOPING
    tags: list[str] = Field(default_factory=list)
    last_updated: Optional[datetime] = None

    @field_validator("last_updated")
    @classmethod
    def normalize_last_updated(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are taken as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "headline": "US CPI Inflation Rate",
                    "current_value": "3.1% (Jan 2026)",
                    "category": "economy",
                    "importance": "high",
                    "confidence": "confirmed",
                    "tags": ["inflation", "cpi"],
                }
            ]
        }
    }


class FactsQuery(BaseModel):
    """Filter and page for fact listings.

    Every filter is an optional exact match; listings only ever include
    active facts.
    """

    category: Optional[Category] = None
    importance: Optional[Importance] = None
    confidence: Optional[Confidence] = None
    limit: int = Field(settings.default_page_size, ge=1, le=settings.max_page_size)
    offset: int = Field(0, ge=0)


class FactDetail(BaseModel):
    """Hydrated fact: attributes, timeline, sources, relations and overlay.

    Attributes:
        timeline: Revisions, newest first.
        sources: Outlets currently attributed through the join table.
        related_facts: Identifiers of related facts.
        is_bookmarked: Caller has bookmarked the fact (False when anonymous).
        is_muted: Caller has muted the fact (False when anonymous).
    """

    id: str
    headline: str
    current_value: str
    category: Category
    importance: Importance
    confidence: Confidence
    tags: list[str] = Field(default_factory=list)
    last_updated: datetime
    timeline: list[TimelineEntry] = Field(default_factory=list)
    sources: list[FactSourceView] = Field(default_factory=list)
    related_facts: list[str] = Field(default_factory=list)
    is_bookmarked: bool = False
    is_muted: bool = False

    model_config = {"frozen": True}


class FactPage(BaseModel):
    """One page of facts plus the total matching the same filter."""

    items: list[FactDetail]
    total: int = Field(..., ge=0)

    model_config = {"frozen": True}


class CategoryStat(BaseModel):
    """Active fact count per category and how many moved within the window."""

    category: Category
    count: int = Field(..., ge=0)
    updates_today: int = Field(..., ge=0)

    model_config = {"frozen": True}
