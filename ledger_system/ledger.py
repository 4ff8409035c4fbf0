"""FactLedger: the operations exposed to transports.

Wires the stores over one Database and normalizes the caller identity at the
boundary. Reads take an optional caller (CallerContext, raw user id, or
None); writes require an identified caller.

Usage:
    ledger = FactLedger(Database("sqlite+aiosqlite:///:memory:"))
    await ledger.init_schema()
    fact = await ledger.create_fact("user-1", fact_attrs, initial_revision, sources)
    page = await ledger.get_facts({"category": "economy"}, caller="user-1")
"""

from datetime import datetime
from typing import Any, Optional, Sequence, Union

from ledger_system.config.logging import get_logger
from ledger_system.config.settings import settings
from ledger_system.data_management.database import Database
from ledger_system.data_management.fact_store import (
    FactInput,
    FactStore,
    RevisionInput,
    SourceInput,
)
from ledger_system.data_management.hydration import HydrationEngine
from ledger_system.data_management.overlay_store import OverlayStore
from ledger_system.data_management.query_engine import QueryEngine
from ledger_system.data_management.relation_graph import RelationGraph
from ledger_system.data_management.schemas import (
    BookmarkToggle,
    CallerContext,
    CategoryStat,
    Confidence,
    FactDetail,
    FactPage,
    FactsQuery,
    Importance,
    MuteToggle,
    caller_from,
    require_identified,
)
from ledger_system.data_management.source_registry import SourceRegistry

CallerInput = Union[CallerContext, str, None]


class FactLedger:
    """Facade over the fact ledger components."""

    def __init__(self, database: Optional[Database] = None):
        self.database = database or Database()
        self.sources = SourceRegistry(self.database)
        self.relations = RelationGraph(self.database)
        self.overlay = OverlayStore(self.database)
        self.hydration = HydrationEngine(self.sources, self.relations, self.overlay)
        self.facts = FactStore(self.database, self.sources, self.hydration)
        self.queries = QueryEngine(self.database, self.hydration, self.overlay)
        self.logger = get_logger("FactLedger")

    async def init_schema(self) -> None:
        await self.database.create_all()

    async def close(self) -> None:
        await self.database.dispose()

    async def __aenter__(self) -> "FactLedger":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # Reads

    async def get_facts(
        self,
        query: Union[FactsQuery, dict[str, Any], None] = None,
        caller: CallerInput = None,
    ) -> FactPage:
        return await self.queries.get_facts(query, caller_from(caller))

    async def get_fact_by_id(self, fact_id: str, caller: CallerInput = None) -> Optional[FactDetail]:
        return await self.queries.get_fact_by_id(fact_id, caller_from(caller))

    async def get_trending_facts(
        self,
        limit: int = settings.default_trending_limit,
        caller: CallerInput = None,
    ) -> list[FactDetail]:
        return await self.queries.get_trending_facts(limit, caller_from(caller))

    async def get_disputed_facts(self, caller: CallerInput = None) -> list[FactDetail]:
        return await self.queries.get_disputed_facts(caller_from(caller))

    async def search_facts(self, query: str, caller: CallerInput = None) -> list[FactDetail]:
        return await self.queries.search_facts(query, caller_from(caller))

    async def get_category_stats(self) -> list[CategoryStat]:
        return await self.queries.get_category_stats()

    async def get_user_bookmarks(self, caller: CallerInput) -> list[FactDetail]:
        return await self.queries.get_user_bookmarks(require_identified(caller))

    # Writes (identified callers only)

    async def create_fact(
        self,
        caller: CallerInput,
        fact: FactInput,
        initial_revision: RevisionInput,
        sources: Sequence[SourceInput],
    ) -> FactDetail:
        identity = require_identified(caller)
        self.logger.debug("create_fact", user_id=identity.user_id)
        return await self.facts.create_fact(fact, initial_revision, sources)

    async def add_revision(
        self,
        caller: CallerInput,
        fact_id: str,
        revision: RevisionInput,
        new_current_value: Optional[str] = None,
        new_confidence: Optional[Union[Confidence, str]] = None,
        new_importance: Optional[Union[Importance, str]] = None,
        updated_at: Optional[datetime] = None,
    ) -> FactDetail:
        identity = require_identified(caller)
        self.logger.debug("add_revision", user_id=identity.user_id, fact_id=fact_id)
        return await self.facts.add_revision(
            fact_id,
            revision,
            new_current_value=new_current_value,
            new_confidence=new_confidence,
            new_importance=new_importance,
            updated_at=updated_at,
        )

    async def deactivate_fact(self, caller: CallerInput, fact_id: str) -> None:
        require_identified(caller)
        await self.facts.deactivate_fact(fact_id)

    async def link_related_facts(
        self,
        caller: CallerInput,
        fact_id: str,
        related_fact_id: str,
    ) -> None:
        require_identified(caller)
        await self.relations.link_related_facts(fact_id, related_fact_id)

    async def toggle_bookmark(self, caller: CallerInput, fact_id: str) -> BookmarkToggle:
        identity = require_identified(caller)
        return await self.overlay.toggle_bookmark(identity.user_id, fact_id)

    async def toggle_mute(self, caller: CallerInput, fact_id: str) -> MuteToggle:
        identity = require_identified(caller)
        return await self.overlay.toggle_mute(identity.user_id, fact_id)
