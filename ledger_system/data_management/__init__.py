"""Data management package for the fact ledger.

Provides the relational storage layer and schemas for:
- Facts - explicitly written current-state projection
- Revisions - append-only history behind each fact
- Sources - outlets normalized by name
- Relations - undirected links between facts
- Overlay - per-user bookmarks and mutes

Components:
- Database: async engine, sessions, error mapping
- SourceRegistry: outlet upsert and fact attribution
- FactStore: create facts, append revisions, deactivate
- RelationGraph: symmetric fact links
- OverlayStore: bookmark / mute toggles
- HydrationEngine: assembles the FactDetail read model
- QueryEngine: listings, trending, disputed, search, category stats
"""

from ledger_system.data_management.database import Database
from ledger_system.data_management.errors import (
    DanglingReferenceError,
    FactNotFoundError,
    InvalidInputError,
    LedgerError,
    StorageUnavailableError,
)
from ledger_system.data_management.source_registry import SourceRegistry
from ledger_system.data_management.relation_graph import RelationGraph
from ledger_system.data_management.overlay_store import OverlayStore
from ledger_system.data_management.hydration import HydrationEngine
from ledger_system.data_management.fact_store import FactStore
from ledger_system.data_management.query_engine import QueryEngine

__all__ = [
    "Database",
    "SourceRegistry",
    "RelationGraph",
    "OverlayStore",
    "HydrationEngine",
    "FactStore",
    "QueryEngine",
    "LedgerError",
    "FactNotFoundError",
    "InvalidInputError",
    "DanglingReferenceError",
    "StorageUnavailableError",
]
