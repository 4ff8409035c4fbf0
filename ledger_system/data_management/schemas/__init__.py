"""Schema package for the fact ledger.

Pydantic models for the write inputs, the hydrated read model and the
caller identity. Facts carry an explicitly written projection (current value,
confidence, importance); revisions are the immutable history behind it.

Primary exports:
- FactCreate / RevisionCreate / SourceRef: write inputs
- FactDetail: hydrated read model returned by every read
- CallerContext: Identified | Anonymous caller identity

Usage:
    from ledger_system.data_management.schemas import FactCreate, Category
    fact = FactCreate(headline="Test Rate", current_value="5%", category=Category.ECONOMY)
"""

# Source schemas
from ledger_system.data_management.schemas.source_schema import (
    SourceTier,
    SourceRef,
    FactSourceView,
)

# Revision schemas
from ledger_system.data_management.schemas.revision_schema import (
    RevisionType,
    RevisionCreate,
    RevisionSource,
    TimelineEntry,
)

# Fact schemas
from ledger_system.data_management.schemas.fact_schema import (
    Category,
    Importance,
    Confidence,
    FactCreate,
    FactsQuery,
    FactDetail,
    FactPage,
    CategoryStat,
)

# Overlay schemas
from ledger_system.data_management.schemas.overlay_schema import (
    BookmarkToggle,
    MuteToggle,
)

# Caller identity
from ledger_system.data_management.schemas.caller_schema import (
    ANONYMOUS,
    Anonymous,
    CallerContext,
    Identified,
    caller_from,
    require_identified,
    user_id_of,
)

__all__ = [
    # Source
    "SourceTier",
    "SourceRef",
    "FactSourceView",
    # Revision
    "RevisionType",
    "RevisionCreate",
    "RevisionSource",
    "TimelineEntry",
    # Fact
    "Category",
    "Importance",
    "Confidence",
    "FactCreate",
    "FactsQuery",
    "FactDetail",
    "FactPage",
    "CategoryStat",
    # Overlay
    "BookmarkToggle",
    "MuteToggle",
    # Caller
    "ANONYMOUS",
    "Anonymous",
    "CallerContext",
    "Identified",
    "caller_from",
    "require_identified",
    "user_id_of",
]
