"""Hydration engine: assembles a bare fact row into the full read model.

Every read path goes through here. For one fact it reads, in order:
1. revisions, newest first
2. outlets linked through the join table (current attribution, independent
   of the per-revision citation inlined on each timeline entry)
3. outgoing related-fact ids (links are always written in both directions)
4. bookmark and mute presence, only for an identified caller

and composes them into a frozen FactDetail. Hydration never writes. There is
no per-step recovery: a failure in any step fails the whole hydration, so a
partial read model is never returned.
"""

from typing import Iterable

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_system.data_management.orm import Fact, Revision, as_utc
from ledger_system.data_management.overlay_store import OverlayStore
from ledger_system.data_management.relation_graph import RelationGraph
from ledger_system.data_management.schemas import (
    CallerContext,
    FactDetail,
    FactSourceView,
    Identified,
    RevisionSource,
    TimelineEntry,
)
from ledger_system.data_management.source_registry import SourceRegistry


class HydrationEngine:
    """Pure read composition of fact, timeline, sources, relations and overlay."""

    def __init__(
        self,
        sources: SourceRegistry,
        relations: RelationGraph,
        overlay: OverlayStore,
    ):
        self._sources = sources
        self._relations = relations
        self._overlay = overlay
        self.logger = logger.bind(component="HydrationEngine")

    async def hydrate(
        self,
        session: AsyncSession,
        row: Fact,
        caller: CallerContext,
    ) -> FactDetail:
        """
        Build the detail view of one fact.

        Args:
            session: Active session
            row: Fact row to expand
            caller: Identified caller gets overlay flags, Anonymous gets False

        Returns:
            Frozen FactDetail
        """
        timeline = await self._timeline(session, row.id)

        sources = [
            FactSourceView(
                name=source.name,
                url=source.url,
                tier=source.tier,
                retrieved_at=as_utc(retrieved_at),
            )
            for source, retrieved_at in await self._sources.sources_for_fact(session, row.id)
        ]

        related = await self._relations.related_fact_ids(session, row.id)

        is_bookmarked = False
        is_muted = False
        if isinstance(caller, Identified):
            is_bookmarked = await self._overlay.is_bookmarked(session, caller.user_id, row.id)
            is_muted = await self._overlay.is_muted(session, caller.user_id, row.id)

        self.logger.debug(
            f"Hydrated fact {row.id}",
            revisions=len(timeline),
            sources=len(sources),
            related=len(related),
        )

        return FactDetail(
            id=row.id,
            headline=row.headline,
            current_value=row.current_value,
            category=row.category,
            importance=row.importance,
            confidence=row.confidence,
            tags=list(row.tags or []),
            last_updated=as_utc(row.last_updated),
            timeline=timeline,
            sources=sources,
            related_facts=related,
            is_bookmarked=is_bookmarked,
            is_muted=is_muted,
        )

    async def hydrate_many(
        self,
        session: AsyncSession,
        rows: Iterable[Fact],
        caller: CallerContext,
    ) -> list[FactDetail]:
        """Hydrate rows one after another, preserving the input order."""
        return [await self.hydrate(session, row, caller) for row in rows]

    async def _timeline(self, session: AsyncSession, fact_id: str) -> list[TimelineEntry]:
        revisions = await session.scalars(
            select(Revision)
            .where(Revision.fact_id == fact_id)
            .order_by(Revision.timestamp.desc())
        )
        return [
            TimelineEntry(
                id=rev.id,
                timestamp=as_utc(rev.timestamp),
                previous_value=rev.previous_value,
                new_value=rev.new_value,
                delta=rev.delta,
                why_it_matters=rev.why_it_matters,
                revision_type=rev.revision_type,
                source=RevisionSource(
                    name=rev.source_name,
                    url=rev.source_url,
                    tier=rev.source_tier,
                ),
            )
            for rev in revisions
        ]
