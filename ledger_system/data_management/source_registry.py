"""Source registry: outlet identity normalized by exact name.

Outlets are created lazily the first time a fact or revision cites them and
are shared across facts afterwards. The first write wins: a later citation
with a different url or tier never changes the stored outlet. Orphaned
outlets are kept.
"""

from datetime import datetime
from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_system.data_management.database import Database
from ledger_system.data_management.orm import FactSource, Source, utcnow
from ledger_system.data_management.schemas import SourceTier


class SourceRegistry:
    """Upsert-by-name outlet registry and fact attribution links.

    Methods take the caller's session so they join its transaction.
    """

    def __init__(self, database: Database):
        self._db = database
        self.logger = logger.bind(component="SourceRegistry")

    async def upsert_source(
        self,
        session: AsyncSession,
        name: str,
        url: Optional[str] = None,
        tier: SourceTier = SourceTier.REPORTING,
    ) -> Source:
        """
        Return the outlet named `name`, creating it if it does not exist.

        Name matching is exact and case-sensitive. Concurrent first sightings
        of the same name resolve to one row through the unique constraint.

        Args:
            session: Active session (joins its transaction)
            name: Outlet name
            url: Outlet URL, stored only on creation
            tier: Outlet tier, stored only on creation

        Returns:
            The stored Source row
        """
        stmt = self._db.insert_ignore(Source).values(
            name=name,
            url=url,
            tier=SourceTier(tier).value,
        )
        result = await session.execute(stmt)
        if result.rowcount:
            self.logger.info(f"Registered source: {name}", tier=SourceTier(tier).value)
        else:
            self.logger.debug(f"Source already registered: {name}")

        source = await session.scalar(select(Source).where(Source.name == name))
        return source

    async def link_source(
        self,
        session: AsyncSession,
        fact_id: str,
        source_id: str,
    ) -> bool:
        """
        Attribute an outlet to a fact. Re-adding an existing pair is a no-op.

        Returns:
            True if a new link was written, False if it already existed
        """
        stmt = self._db.insert_ignore(FactSource).values(
            fact_id=fact_id,
            source_id=source_id,
            retrieved_at=utcnow(),
        )
        result = await session.execute(stmt)
        linked = bool(result.rowcount)
        if not linked:
            self.logger.debug(f"Source {source_id} already linked to fact {fact_id}")
        return linked

    async def sources_for_fact(
        self,
        session: AsyncSession,
        fact_id: str,
    ) -> list[tuple[Source, datetime]]:
        """Outlets linked to a fact with their retrieval time, oldest link first."""
        result = await session.execute(
            select(Source, FactSource.retrieved_at)
            .join(FactSource, FactSource.source_id == Source.id)
            .where(FactSource.fact_id == fact_id)
            .order_by(FactSource.retrieved_at, Source.name)
        )
        return [(source, retrieved_at) for source, retrieved_at in result.all()]

    async def attribute(
        self,
        session: AsyncSession,
        fact_id: str,
        name: str,
        url: Optional[str] = None,
        tier: SourceTier = SourceTier.REPORTING,
    ) -> Source:
        """Upsert an outlet and link it to a fact in one step."""
        source = await self.upsert_source(session, name, url, tier)
        await self.link_source(session, fact_id, source.id)
        return source
