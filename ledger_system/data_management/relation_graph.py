"""Relation graph: undirected "related to" links between facts.

Each undirected edge is stored as two directed rows (a->b and b->a). Both
rows are written together in one transaction by link_related_facts, and
reads only ever follow outgoing rows, which is enough to see the full
relation from either end.
"""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_system.data_management.database import Database
from ledger_system.data_management.errors import InvalidInputError
from ledger_system.data_management.orm import FactRelation


class RelationGraph:
    """Symmetric fact linkage behind a single undirected-edge operation."""

    def __init__(self, database: Database):
        self._db = database
        self.logger = logger.bind(component="RelationGraph")

    async def link_related_facts(self, fact_id: str, related_fact_id: str) -> None:
        """
        Link two facts in both directions. Idempotent.

        Existence of either fact is not checked up front; a missing fact is
        reported by the store's foreign-key constraint.

        Args:
            fact_id: One end of the edge
            related_fact_id: The other end

        Raises:
            InvalidInputError: If both ends are the same fact
            DanglingReferenceError: If either fact does not exist
        """
        if fact_id == related_fact_id:
            raise InvalidInputError("A fact cannot be related to itself")

        async with self._db.session(write=True) as session:
            created = 0
            for src, dst in ((fact_id, related_fact_id), (related_fact_id, fact_id)):
                stmt = self._db.insert_ignore(FactRelation).values(
                    fact_id=src,
                    related_fact_id=dst,
                )
                result = await session.execute(stmt)
                created += result.rowcount or 0

        if created:
            self.logger.info(f"Linked facts {fact_id} <-> {related_fact_id}")
        else:
            self.logger.debug(f"Facts already linked: {fact_id} <-> {related_fact_id}")

    async def related_fact_ids(self, session: AsyncSession, fact_id: str) -> list[str]:
        """Identifiers of facts related to `fact_id` (outgoing rows only)."""
        result = await session.scalars(
            select(FactRelation.related_fact_id)
            .where(FactRelation.fact_id == fact_id)
            .order_by(FactRelation.related_fact_id)
        )
        return list(result)
