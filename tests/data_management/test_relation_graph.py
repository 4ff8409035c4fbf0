"""Tests for RelationGraph: symmetric, idempotent fact links."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from ledger_system.data_management import (
    Database,
    DanglingReferenceError,
    InvalidInputError,
)
from ledger_system.data_management.orm import FactRelation
from ledger_system.ledger import FactLedger

USER = "editor"
SOURCES = [{"name": "Wire A", "tier": "wire"}]


def fact_inputs(headline):
    return (
        {"headline": headline, "current_value": "v1", "category": "economy"},
        {
            "new_value": "v1",
            "delta": "Initial",
            "why_it_matters": "Context",
            "revision_type": "initial",
            "source_name": "Wire A",
        },
        SOURCES,
    )


@pytest_asyncio.fixture
async def ledger():
    ledger = FactLedger(Database("sqlite+aiosqlite:///:memory:"))
    await ledger.init_schema()
    yield ledger
    await ledger.close()


@pytest_asyncio.fixture
async def pair(ledger):
    a = await ledger.create_fact(USER, *fact_inputs("Fact A"))
    b = await ledger.create_fact(USER, *fact_inputs("Fact B"))
    return a, b


class TestLinkRelatedFacts:
    """Linking writes both directions exactly once."""

    @pytest.mark.asyncio
    async def test_link_is_symmetric(self, ledger, pair):
        a, b = pair
        await ledger.link_related_facts(USER, a.id, b.id)

        assert (await ledger.get_fact_by_id(a.id)).related_facts == [b.id]
        assert (await ledger.get_fact_by_id(b.id)).related_facts == [a.id]

    @pytest.mark.asyncio
    async def test_double_link_leaves_two_rows(self, ledger, pair):
        """Linking twice, in either direction, stores exactly two edges."""
        a, b = pair
        await ledger.link_related_facts(USER, a.id, b.id)
        await ledger.link_related_facts(USER, a.id, b.id)
        await ledger.link_related_facts(USER, b.id, a.id)

        async with ledger.database.session() as session:
            rows = await session.scalar(select(func.count()).select_from(FactRelation))
        assert rows == 2

    @pytest.mark.asyncio
    async def test_self_link_rejected(self, ledger, pair):
        a, _ = pair
        with pytest.raises(InvalidInputError):
            await ledger.link_related_facts(USER, a.id, a.id)

    @pytest.mark.asyncio
    async def test_missing_fact_is_dangling_reference(self, ledger, pair):
        """The foreign key reports a link to a fact that does not exist."""
        a, _ = pair
        with pytest.raises(DanglingReferenceError):
            await ledger.link_related_facts(USER, a.id, "missing")

        assert (await ledger.get_fact_by_id(a.id)).related_facts == []

    @pytest.mark.asyncio
    async def test_anonymous_caller_cannot_link(self, ledger, pair):
        a, b = pair
        with pytest.raises(PermissionError):
            await ledger.link_related_facts(None, a.id, b.id)

    @pytest.mark.asyncio
    async def test_fact_with_several_relations(self, ledger, pair):
        a, b = pair
        c = await ledger.create_fact(USER, *fact_inputs("Fact C"))
        await ledger.link_related_facts(USER, a.id, b.id)
        await ledger.link_related_facts(USER, c.id, a.id)

        related = (await ledger.get_fact_by_id(a.id)).related_facts
        assert sorted(related) == sorted([b.id, c.id])
        assert (await ledger.get_fact_by_id(c.id)).related_facts == [a.id]
