"""Source schemas: outlet identity and per-fact attribution.

A source is a normalized outlet (one record per unique name). Its tier is a
property of the outlet. When a single citation carries a different tier, that
tier is recorded inline on the revision, not on the outlet.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SourceTier(str, Enum):
    """Evidentiary class of an outlet.

    PRIMARY: The originating body itself (central bank, ministry, company)
    WIRE: Wire services relaying primary material (Reuters, AP)
    REPORTING: Newsroom reporting
    ANALYSIS: Think tanks, research shops, commentary
    """

    PRIMARY = "primary"
    WIRE = "wire"
    REPORTING = "reporting"
    ANALYSIS = "analysis"


class SourceRef(BaseModel):
    """Attribution supplied when creating a fact.

    Attributes:
        name: Outlet name, the dedup key (exact, case-sensitive).
        url: Optional outlet URL. Only used when the outlet is first seen.
        tier: Outlet tier. Only used when the outlet is first seen.
    """

    name: str = Field(..., min_length=1, description="Outlet name (unique key)")
    url: Optional[str] = None
    tier: SourceTier = SourceTier.REPORTING

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Federal Reserve", "url": "https://federalreserve.gov", "tier": "primary"},
                {"name": "Reuters", "url": "https://reuters.com", "tier": "wire"},
            ]
        }
    }


class FactSourceView(BaseModel):
    """An outlet currently backing a fact, as read through the join table."""

    name: str
    url: Optional[str] = None
    tier: SourceTier
    retrieved_at: datetime

    model_config = {"frozen": True}
