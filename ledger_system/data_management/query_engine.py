"""Query and search engine: selects fact rows, then hydrates them.

Features:
- Filtered, paginated listings with an independently counted total
- Trending by revision frequency in a trailing window, with a fallback to
  the most recently updated facts when nothing moved
- Disputed facts
- Case-insensitive substring search over facts and their revisions
- Per-category activity stats
- A user's bookmarks in bookmark order

Listings only include active facts. A fact fetched by id resolves even when
deactivated.
"""

from datetime import timedelta
from typing import Any, Optional, Union

from loguru import logger
from sqlalchemy import String, and_, cast, func, or_, select

from ledger_system.config.settings import settings
from ledger_system.data_management.database import Database
from ledger_system.data_management.errors import InvalidInputError
from ledger_system.data_management.hydration import HydrationEngine
from ledger_system.data_management.orm import Fact, Revision, utcnow
from ledger_system.data_management.overlay_store import OverlayStore
from ledger_system.data_management.schemas import (
    ANONYMOUS,
    CallerContext,
    Category,
    CategoryStat,
    Confidence,
    FactDetail,
    FactPage,
    FactsQuery,
    Identified,
)


class QueryEngine:
    """Read operations over the fact ledger."""

    def __init__(
        self,
        database: Database,
        hydration: HydrationEngine,
        overlay: OverlayStore,
    ):
        self._db = database
        self._hydration = hydration
        self._overlay = overlay
        self.logger = logger.bind(component="QueryEngine")

    @staticmethod
    def _window_start():
        return utcnow() - timedelta(hours=settings.trending_window_hours)

    async def get_facts(
        self,
        query: Union[FactsQuery, dict[str, Any], None] = None,
        caller: CallerContext = ANONYMOUS,
    ) -> FactPage:
        """
        One page of active facts matching the filter, newest update first.

        The total is counted with the same predicate as the page, never
        derived from the page length.

        Args:
            query: Filters and paging (validated into FactsQuery)
            caller: Caller identity for overlay flags

        Returns:
            FactPage with items and total
        """
        query = FactsQuery.model_validate(query or {})

        conditions = [Fact.is_active.is_(True)]
        if query.category:
            conditions.append(Fact.category == query.category.value)
        if query.importance:
            conditions.append(Fact.importance == query.importance.value)
        if query.confidence:
            conditions.append(Fact.confidence == query.confidence.value)
        where = and_(*conditions)

        async with self._db.session() as session:
            total = await session.scalar(select(func.count()).select_from(Fact).where(where))
            rows = await session.scalars(
                select(Fact)
                .where(where)
                .order_by(Fact.last_updated.desc())
                .limit(query.limit)
                .offset(query.offset)
            )
            items = await self._hydration.hydrate_many(session, rows.all(), caller)

        self.logger.debug(
            "Listed facts",
            total=total,
            returned=len(items),
            offset=query.offset,
        )
        return FactPage(items=items, total=int(total or 0))

    async def get_fact_by_id(
        self,
        fact_id: str,
        caller: CallerContext = ANONYMOUS,
    ) -> Optional[FactDetail]:
        """Hydrated fact, or None if no fact has this id."""
        async with self._db.session() as session:
            row = await session.get(Fact, fact_id)
            if row is None:
                return None
            return await self._hydration.hydrate(session, row, caller)

    async def get_trending_facts(
        self,
        limit: int = settings.default_trending_limit,
        caller: CallerContext = ANONYMOUS,
    ) -> list[FactDetail]:
        """
        Active facts with the most revisions in the trailing window.

        Ordered by revision count, ties broken by the most recent revision.
        When no fact has a revision in the window, returns the `limit` most
        recently updated active facts instead. A limit above
        max_trending_limit is clamped to it.

        Raises:
            InvalidInputError: limit below 1
        """
        if limit < 1:
            raise InvalidInputError("limit must be at least 1")
        limit = min(limit, settings.max_trending_limit)

        revision_count = func.count(Revision.id).label("revision_count")
        ranking = (
            select(Revision.fact_id, revision_count)
            .join(Fact, Fact.id == Revision.fact_id)
            .where(Revision.timestamp > self._window_start(), Fact.is_active.is_(True))
            .group_by(Revision.fact_id)
            .order_by(revision_count.desc(), func.max(Revision.timestamp).desc())
            .limit(limit)
        )

        async with self._db.session() as session:
            ranked = (await session.execute(ranking)).all()
            if not ranked:
                self.logger.debug("No revisions in window, falling back to recent facts")
                rows = await session.scalars(
                    select(Fact)
                    .where(Fact.is_active.is_(True))
                    .order_by(Fact.last_updated.desc())
                    .limit(limit)
                )
                return await self._hydration.hydrate_many(session, rows.all(), caller)

            fact_ids = [fact_id for fact_id, _ in ranked]
            rows = await self._rows_in_order(session, fact_ids)
            return await self._hydration.hydrate_many(session, rows, caller)

    async def get_disputed_facts(self, caller: CallerContext = ANONYMOUS) -> list[FactDetail]:
        """Every active disputed fact, newest update first."""
        async with self._db.session() as session:
            rows = await session.scalars(
                select(Fact)
                .where(
                    Fact.confidence == Confidence.DISPUTED.value,
                    Fact.is_active.is_(True),
                )
                .order_by(Fact.last_updated.desc())
            )
            return await self._hydration.hydrate_many(session, rows.all(), caller)

    async def search_facts(
        self,
        text: str,
        caller: CallerContext = ANONYMOUS,
    ) -> list[FactDetail]:
        """
        Case-insensitive substring search over facts and their revisions.

        Fact-level matches (headline, current value, tags) come first, newest
        update first. Facts reached only through revision text (delta, why it
        matters, new value) follow, most recent matching revision first. Each
        fact appears once. The query is matched as given, surrounding
        whitespace included.

        Raises:
            InvalidInputError: Blank query
        """
        term = text or ""
        if not term.strip():
            raise InvalidInputError("Search query required")

        fact_match = or_(
            Fact.headline.icontains(term, autoescape=True),
            Fact.current_value.icontains(term, autoescape=True),
            cast(Fact.tags, String).icontains(term, autoescape=True),
        )
        revision_match = or_(
            Revision.delta.icontains(term, autoescape=True),
            Revision.why_it_matters.icontains(term, autoescape=True),
            Revision.new_value.icontains(term, autoescape=True),
        )

        async with self._db.session() as session:
            direct = (
                await session.scalars(
                    select(Fact)
                    .where(Fact.is_active.is_(True), fact_match)
                    .order_by(Fact.last_updated.desc())
                    .limit(settings.search_fact_limit)
                )
            ).all()
            seen = {row.id for row in direct}

            revision_hits = (
                await session.scalars(
                    select(Revision.fact_id)
                    .join(Fact, Fact.id == Revision.fact_id)
                    .where(Fact.is_active.is_(True), revision_match)
                    .group_by(Revision.fact_id)
                    .order_by(func.max(Revision.timestamp).desc())
                    .limit(settings.search_revision_limit)
                )
            ).all()
            extra_ids = [fact_id for fact_id in revision_hits if fact_id not in seen]
            extra = await self._rows_in_order(session, extra_ids)

            results = await self._hydration.hydrate_many(session, [*direct, *extra], caller)

        self.logger.debug(
            f"Search '{term}'",
            fact_hits=len(direct),
            revision_only_hits=len(extra),
        )
        return results

    async def get_category_stats(self) -> list[CategoryStat]:
        """
        Active fact count per category and how many were updated in the window.

        Categories without active facts are omitted.
        """
        window_start = self._window_start()
        async with self._db.session() as session:
            totals = (
                await session.execute(
                    select(Fact.category, func.count())
                    .where(Fact.is_active.is_(True))
                    .group_by(Fact.category)
                )
            ).all()
            today = dict(
                (
                    await session.execute(
                        select(Fact.category, func.count())
                        .where(
                            Fact.is_active.is_(True),
                            Fact.last_updated > window_start,
                        )
                        .group_by(Fact.category)
                    )
                ).all()
            )

        order = {category.value: index for index, category in enumerate(Category)}
        stats = [
            CategoryStat(
                category=category,
                count=int(count),
                updates_today=int(today.get(category, 0)),
            )
            for category, count in totals
        ]
        return sorted(stats, key=lambda s: order[s.category.value])

    async def get_user_bookmarks(self, caller: CallerContext) -> list[FactDetail]:
        """
        Facts the caller bookmarked, most recent bookmark first.

        Anonymous callers have no bookmarks.
        """
        if not isinstance(caller, Identified):
            return []
        async with self._db.session() as session:
            fact_ids = await self._overlay.bookmarked_fact_ids(session, caller.user_id)
            rows = await self._rows_in_order(session, fact_ids)
            return await self._hydration.hydrate_many(session, rows, caller)

    @staticmethod
    async def _rows_in_order(session, fact_ids: list[str]) -> list[Fact]:
        """Fetch fact rows by id, returned in the order of `fact_ids`."""
        if not fact_ids:
            return []
        rows = await session.scalars(select(Fact).where(Fact.id.in_(fact_ids)))
        by_id = {row.id: row for row in rows}
        return [by_id[fact_id] for fact_id in fact_ids if fact_id in by_id]
