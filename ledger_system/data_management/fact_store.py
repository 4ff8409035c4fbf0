"""Fact store and revision ledger: the write path for facts.

A fact is an explicitly written projection (current value, confidence,
importance, last update) in front of an append-only ledger of revisions.
Writes state every projection field they change; nothing is derived from the
ledger tail. Revisions are never updated or deleted, and facts are never hard
deleted, only deactivated.

Each of create_fact and add_revision runs as one transaction covering the
fact, the revision and the source attribution, so a failure at any step
leaves no half-written fact or revision behind.

History must be written oldest-first: a revision may not predate the fact's
initial revision, and every append stamps last_updated with the write time
unless the caller passes an explicit updated_at (used when replaying seeded
history).
"""

from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Union

from loguru import logger
from sqlalchemy import func, select, update

from ledger_system.data_management.database import Database
from ledger_system.data_management.errors import FactNotFoundError, InvalidInputError
from ledger_system.data_management.hydration import HydrationEngine
from ledger_system.data_management.orm import Fact, Revision, as_utc, new_id, utcnow
from ledger_system.data_management.schemas import (
    ANONYMOUS,
    Confidence,
    FactCreate,
    FactDetail,
    Importance,
    RevisionCreate,
    RevisionType,
    SourceRef,
)
from ledger_system.data_management.source_registry import SourceRegistry

FactInput = Union[FactCreate, Dict[str, Any]]
RevisionInput = Union[RevisionCreate, Dict[str, Any]]
SourceInput = Union[SourceRef, Dict[str, Any]]


class FactStore:
    """
    Create facts and append revisions.

    Invariants kept here:
    - every fact has exactly one revision of type "initial", with no
      previous value, written together with the fact
    - every later revision has a previous value and is no older than the
      initial revision
    - last_updated never moves backwards
    - every fact has at least one attributed source from creation on
    """

    def __init__(
        self,
        database: Database,
        sources: SourceRegistry,
        hydration: HydrationEngine,
    ):
        self._db = database
        self._sources = sources
        self._hydration = hydration
        self.logger = logger.bind(component="FactStore")

    async def create_fact(
        self,
        fact: FactInput,
        initial_revision: RevisionInput,
        sources: Sequence[SourceInput],
    ) -> FactDetail:
        """
        Insert a fact with its initial revision and source attribution.

        The fact's current value is the one supplied in `fact`; it is not
        taken from the initial revision.

        Args:
            fact: Fact attributes
            initial_revision: First revision (type initial, no previous value)
            sources: Outlets backing the fact, at least one

        Returns:
            Hydrated fact

        Raises:
            pydantic.ValidationError: Malformed attributes
            InvalidInputError: Empty source list or a non-initial first revision
        """
        fact = FactCreate.model_validate(fact)
        revision = RevisionCreate.model_validate(initial_revision)
        refs = [SourceRef.model_validate(s) for s in sources]

        if not refs:
            raise InvalidInputError("At least one source is required to create a fact")
        if revision.previous_value is not None:
            raise InvalidInputError("The initial revision must not have a previous value")
        if revision.revision_type != RevisionType.INITIAL:
            raise InvalidInputError(
                f"The first revision must be of type 'initial', got '{revision.revision_type.value}'"
            )

        now = utcnow()
        fact_id = new_id()

        async with self._db.session(write=True) as session:
            session.add(
                Fact(
                    id=fact_id,
                    headline=fact.headline,
                    current_value=fact.current_value,
                    category=fact.category.value,
                    importance=fact.importance.value,
                    confidence=fact.confidence.value,
                    tags=list(fact.tags),
                    last_updated=fact.last_updated or now,
                    created_at=now,
                    is_active=True,
                )
            )
            await session.flush()

            session.add(self._revision_row(fact_id, revision, now))
            await session.flush()

            for ref in refs:
                await self._sources.attribute(session, fact_id, ref.name, ref.url, ref.tier)

        self.logger.info(
            f"Created fact {fact_id}",
            headline=fact.headline,
            category=fact.category.value,
            sources=len(refs),
        )
        return await self._reload(fact_id)

    async def add_revision(
        self,
        fact_id: str,
        revision: RevisionInput,
        new_current_value: Optional[str] = None,
        new_confidence: Optional[Union[Confidence, str]] = None,
        new_importance: Optional[Union[Importance, str]] = None,
        updated_at: Optional[datetime] = None,
    ) -> FactDetail:
        """
        Append a revision and move the fact's projection forward.

        Only the projection fields passed explicitly are overwritten. The
        revision's previous value is trusted as given and is not compared to
        the fact's current value. last_updated is set to the write time,
        whatever the revision's own timestamp says.

        Args:
            fact_id: Fact to revise
            revision: Revision attributes (not initial, previous value required)
            new_current_value: New current value, if it changes
            new_confidence: New confidence, if it changes
            new_importance: New importance, if it changes
            updated_at: Explicit last_updated to record instead of now.
                last_updated still never moves backwards.

        Returns:
            Hydrated fact

        Raises:
            FactNotFoundError: Unknown fact
            pydantic.ValidationError: Malformed attributes
            InvalidInputError: Initial-type revision, missing previous value,
                blank new current value, or a timestamp earlier than the
                fact's initial revision
        """
        revision = RevisionCreate.model_validate(revision)
        if revision.revision_type == RevisionType.INITIAL:
            raise InvalidInputError("A fact has exactly one initial revision")
        if revision.previous_value is None:
            raise InvalidInputError("A non-initial revision must record its previous value")

        changes: Dict[str, Any] = {}
        if new_current_value is not None:
            if not new_current_value.strip():
                raise InvalidInputError("New current value must not be blank")
            changes["current_value"] = new_current_value
        if new_confidence is not None:
            changes["confidence"] = Confidence(new_confidence).value
        if new_importance is not None:
            changes["importance"] = Importance(new_importance).value

        now = utcnow()
        moment = revision.timestamp or now
        async with self._db.session(write=True) as session:
            row = await session.get(Fact, fact_id)
            if row is None:
                raise FactNotFoundError(fact_id)

            created = await session.scalar(
                select(Revision.timestamp).where(
                    Revision.fact_id == fact_id,
                    Revision.revision_type == RevisionType.INITIAL.value,
                )
            )
            if created is not None and moment < as_utc(created):
                raise InvalidInputError(
                    f"Revision at {moment.isoformat()} predates the initial revision of fact {fact_id}"
                )

            session.add(self._revision_row(fact_id, revision, now))

            stamp = as_utc(updated_at) if updated_at is not None else now
            changes["last_updated"] = max(as_utc(row.last_updated), stamp)
            await session.execute(
                update(Fact).where(Fact.id == fact_id).values(**changes)
            )

            await self._sources.attribute(
                session,
                fact_id,
                revision.source_name,
                revision.source_url,
                revision.source_tier,
            )

        self.logger.info(
            f"Appended {revision.revision_type.value} revision to fact {fact_id}",
            changed=sorted(k for k in changes if k != "last_updated"),
        )
        return await self._reload(fact_id)

    async def deactivate_fact(self, fact_id: str) -> None:
        """
        Soft-delete a fact. Its history is kept; listings stop showing it.

        Raises:
            FactNotFoundError: Unknown fact
        """
        async with self._db.session(write=True) as session:
            result = await session.execute(
                update(Fact).where(Fact.id == fact_id).values(is_active=False)
            )
            if not result.rowcount:
                raise FactNotFoundError(fact_id)
        self.logger.info(f"Deactivated fact {fact_id}")

    async def count_facts(self) -> int:
        """Number of stored facts, active or not."""
        async with self._db.session() as session:
            total = await session.scalar(select(func.count()).select_from(Fact))
            return int(total or 0)

    async def _reload(self, fact_id: str) -> FactDetail:
        async with self._db.session() as session:
            row = await session.get(Fact, fact_id)
            if row is None:
                raise FactNotFoundError(fact_id)
            return await self._hydration.hydrate(session, row, ANONYMOUS)

    @staticmethod
    def _revision_row(fact_id: str, revision: RevisionCreate, now) -> Revision:
        return Revision(
            fact_id=fact_id,
            previous_value=revision.previous_value,
            new_value=revision.new_value,
            delta=revision.delta,
            why_it_matters=revision.why_it_matters,
            revision_type=revision.revision_type.value,
            source_name=revision.source_name,
            source_url=revision.source_url,
            source_tier=revision.source_tier.value,
            timestamp=revision.timestamp or now,
        )
