"""Tests for FactStore: the create / append write path.

Tests cover:
1. create_fact returns a hydrated fact with exactly one initial revision
2. Contract checks rejected before any write
3. add_revision appends, stamps last_updated, overwrites only given fields
   and rejects revisions older than the initial one
4. Source attribution through revisions (idempotent links)
5. Atomicity of create_fact and add_revision
6. Soft delete
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from pydantic import ValidationError

from ledger_system.data_management import (
    Database,
    FactNotFoundError,
    InvalidInputError,
)
from ledger_system.data_management.schemas import Confidence, Importance, RevisionType
from ledger_system.ledger import FactLedger

USER = "user-1"


def fact_attrs(**overrides):
    attrs = {
        "headline": "Test Rate",
        "current_value": "5%",
        "category": "economy",
        "importance": "high",
        "confidence": "confirmed",
        "tags": ["rates"],
    }
    attrs.update(overrides)
    return attrs


def initial_revision(**overrides):
    attrs = {
        "previous_value": None,
        "new_value": "5%",
        "delta": "Tracking began",
        "why_it_matters": "Baseline for later changes",
        "revision_type": "initial",
        "source_name": "Wire A",
        "source_tier": "wire",
    }
    attrs.update(overrides)
    return attrs


def update_revision(**overrides):
    attrs = {
        "previous_value": "5%",
        "new_value": "6%",
        "delta": "Up 1pp",
        "why_it_matters": "Tighter conditions",
        "revision_type": "update",
        "source_name": "Wire A",
        "source_tier": "wire",
    }
    attrs.update(overrides)
    return attrs


SOURCES = [{"name": "Wire A", "tier": "wire"}]


@pytest_asyncio.fixture
async def ledger():
    """Fresh in-memory ledger per test."""
    ledger = FactLedger(Database("sqlite+aiosqlite:///:memory:"))
    await ledger.init_schema()
    yield ledger
    await ledger.close()


class TestCreateFact:
    """Tests for create_fact."""

    @pytest.mark.asyncio
    async def test_create_returns_hydrated_fact(self, ledger):
        """A created fact carries one initial revision and its sources."""
        fact = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        assert fact.id
        assert fact.headline == "Test Rate"
        assert fact.current_value == "5%"
        assert fact.importance == Importance.HIGH
        assert fact.tags == ["rates"]
        assert len(fact.timeline) == 1
        assert fact.timeline[0].revision_type == RevisionType.INITIAL
        assert fact.timeline[0].previous_value is None
        assert [s.name for s in fact.sources] == ["Wire A"]
        assert fact.related_facts == []
        assert fact.is_bookmarked is False
        assert fact.is_muted is False

    @pytest.mark.asyncio
    async def test_current_value_taken_from_fact_attributes(self, ledger):
        """The current value is what the writer supplied, not the revision value."""
        fact = await ledger.create_fact(
            USER,
            fact_attrs(current_value="5% (held)"),
            initial_revision(new_value="5%"),
            SOURCES,
        )

        assert fact.current_value == "5% (held)"
        assert fact.timeline[0].new_value == "5%"

    @pytest.mark.asyncio
    async def test_defaults_applied(self, ledger):
        """Importance and confidence default to medium / developing."""
        fact = await ledger.create_fact(
            USER,
            {"headline": "Bare", "current_value": "1", "category": "science"},
            initial_revision(),
            SOURCES,
        )

        assert fact.importance == Importance.MEDIUM
        assert fact.confidence == Confidence.DEVELOPING
        assert fact.tags == []

    @pytest.mark.asyncio
    async def test_revision_source_and_fact_sources_both_linked(self, ledger):
        """Every listed source is linked; the revision source is inlined."""
        fact = await ledger.create_fact(
            USER,
            fact_attrs(),
            initial_revision(source_name="Central Bank", source_tier="primary"),
            [{"name": "Central Bank", "tier": "primary"}, {"name": "Wire A", "tier": "wire"}],
        )

        assert {s.name for s in fact.sources} == {"Central Bank", "Wire A"}
        assert fact.timeline[0].source.name == "Central Bank"

    @pytest.mark.asyncio
    async def test_empty_sources_rejected(self, ledger):
        """At least one source is required."""
        with pytest.raises(InvalidInputError):
            await ledger.create_fact(USER, fact_attrs(), initial_revision(), [])

        assert await ledger.facts.count_facts() == 0

    @pytest.mark.asyncio
    async def test_initial_revision_with_previous_value_rejected(self, ledger):
        """The initial revision has no previous value."""
        with pytest.raises(InvalidInputError):
            await ledger.create_fact(
                USER, fact_attrs(), initial_revision(previous_value="4%"), SOURCES
            )

        assert await ledger.facts.count_facts() == 0

    @pytest.mark.asyncio
    async def test_non_initial_first_revision_rejected(self, ledger):
        """The first revision must be of type initial."""
        with pytest.raises(InvalidInputError):
            await ledger.create_fact(
                USER, fact_attrs(), initial_revision(revision_type="update"), SOURCES
            )

    @pytest.mark.asyncio
    async def test_malformed_attributes_rejected(self, ledger):
        """Unknown enum values and empty text fail validation before any write."""
        with pytest.raises(ValidationError):
            await ledger.create_fact(USER, fact_attrs(category="sports"), initial_revision(), SOURCES)
        with pytest.raises(ValidationError):
            await ledger.create_fact(USER, fact_attrs(headline=""), initial_revision(), SOURCES)
        with pytest.raises(ValidationError):
            await ledger.create_fact(USER, fact_attrs(), initial_revision(delta=""), SOURCES)

        assert await ledger.facts.count_facts() == 0

    @pytest.mark.asyncio
    async def test_anonymous_caller_cannot_write(self, ledger):
        """Writes require an identified caller."""
        with pytest.raises(PermissionError):
            await ledger.create_fact(None, fact_attrs(), initial_revision(), SOURCES)
        with pytest.raises(PermissionError):
            await ledger.create_fact("", fact_attrs(), initial_revision(), SOURCES)


class TestAddRevision:
    """Tests for add_revision."""

    @pytest.fixture
    def day_ago(self):
        return datetime.now(timezone.utc) - timedelta(days=1)

    @pytest.mark.asyncio
    async def test_append_moves_projection_forward(self, ledger, day_ago):
        """Appending a revision grows the timeline and updates the current value."""
        created = await ledger.create_fact(
            USER,
            fact_attrs(last_updated=day_ago),
            initial_revision(timestamp=day_ago),
            SOURCES,
        )

        fact = await ledger.add_revision(
            USER, created.id, update_revision(), new_current_value="6%"
        )

        assert len(fact.timeline) == 2
        assert fact.current_value == "6%"
        assert fact.last_updated > created.last_updated
        assert fact.timeline[0].new_value == "6%"
        assert fact.timeline[0].previous_value == "5%"
        assert fact.timeline[-1].revision_type == RevisionType.INITIAL

    @pytest.mark.asyncio
    async def test_omitted_fields_keep_prior_values(self, ledger):
        """Only explicitly supplied projection fields change."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        fact = await ledger.add_revision(USER, created.id, update_revision())

        assert fact.current_value == "5%"
        assert fact.confidence == Confidence.CONFIRMED
        assert fact.importance == Importance.HIGH

    @pytest.mark.asyncio
    async def test_supplied_fields_overwritten(self, ledger):
        """Confidence and importance are overwritten when given."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        fact = await ledger.add_revision(
            USER,
            created.id,
            update_revision(revision_type="correction"),
            new_current_value="6%",
            new_confidence="disputed",
            new_importance=Importance.BREAKING,
        )

        assert fact.current_value == "6%"
        assert fact.confidence == Confidence.DISPUTED
        assert fact.importance == Importance.BREAKING

    @pytest.mark.asyncio
    async def test_previous_value_not_checked_against_current(self, ledger):
        """The ledger trusts the caller's previous value."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        fact = await ledger.add_revision(
            USER, created.id, update_revision(previous_value="something else")
        )

        assert fact.timeline[0].previous_value == "something else"

    @pytest.mark.asyncio
    async def test_backdated_revision_still_stamps_write_time(self, ledger):
        """last_updated records when the revision was written, not its own date."""
        three_days_ago = datetime.now(timezone.utc) - timedelta(days=3)
        created = await ledger.create_fact(
            USER,
            fact_attrs(last_updated=three_days_ago),
            initial_revision(timestamp=three_days_ago),
            SOURCES,
        )
        before = datetime.now(timezone.utc)

        fact = await ledger.add_revision(
            USER,
            created.id,
            update_revision(timestamp=three_days_ago + timedelta(days=1)),
        )

        assert fact.last_updated >= before
        assert fact.timeline[0].timestamp < before

    @pytest.mark.asyncio
    async def test_future_dated_revision_does_not_move_last_updated_ahead(self, ledger):
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)
        next_week = datetime.now(timezone.utc) + timedelta(days=7)

        fact = await ledger.add_revision(USER, created.id, update_revision(timestamp=next_week))

        assert fact.last_updated <= datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_explicit_updated_at(self, ledger):
        """updated_at replaces the write time but never moves last_updated backwards."""
        three_days_ago = datetime.now(timezone.utc) - timedelta(days=3)
        two_days_ago = three_days_ago + timedelta(days=1)
        created = await ledger.create_fact(
            USER,
            fact_attrs(last_updated=three_days_ago),
            initial_revision(timestamp=three_days_ago),
            SOURCES,
        )

        fact = await ledger.add_revision(
            USER,
            created.id,
            update_revision(timestamp=two_days_ago),
            updated_at=two_days_ago,
        )
        assert fact.last_updated == two_days_ago

        fact = await ledger.add_revision(
            USER,
            created.id,
            update_revision(previous_value="6%", new_value="7%", timestamp=two_days_ago),
            updated_at=three_days_ago,
        )
        assert fact.last_updated == two_days_ago

    @pytest.mark.asyncio
    async def test_revision_before_initial_rejected(self, ledger, day_ago):
        """The initial revision stays the oldest entry of the timeline."""
        created = await ledger.create_fact(
            USER,
            fact_attrs(last_updated=day_ago),
            initial_revision(timestamp=day_ago),
            SOURCES,
        )

        with pytest.raises(InvalidInputError):
            await ledger.add_revision(
                USER, created.id, update_revision(timestamp=day_ago - timedelta(days=2))
            )

        fact = await ledger.get_fact_by_id(created.id)
        assert len(fact.timeline) == 1
        assert fact.timeline[-1].revision_type == RevisionType.INITIAL
        assert fact.last_updated == created.last_updated

    @pytest.mark.asyncio
    async def test_blank_current_value_rejected(self, ledger):
        """An empty new current value is an error, not an omission."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        for blank in ("", "   "):
            with pytest.raises(InvalidInputError):
                await ledger.add_revision(
                    USER, created.id, update_revision(), new_current_value=blank
                )

        fact = await ledger.get_fact_by_id(created.id)
        assert fact.current_value == "5%"
        assert len(fact.timeline) == 1

    @pytest.mark.asyncio
    async def test_unknown_fact(self, ledger):
        """Appending to a missing fact is a not-found error."""
        with pytest.raises(FactNotFoundError) as excinfo:
            await ledger.add_revision(USER, "missing", update_revision())

        assert excinfo.value.fact_id == "missing"

    @pytest.mark.asyncio
    async def test_second_initial_revision_rejected(self, ledger):
        """A fact keeps exactly one initial revision."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        with pytest.raises(InvalidInputError):
            await ledger.add_revision(
                USER, created.id, update_revision(revision_type="initial")
            )
        with pytest.raises(InvalidInputError):
            await ledger.add_revision(USER, created.id, update_revision(previous_value=None))

        fact = await ledger.get_fact_by_id(created.id)
        assert len(fact.timeline) == 1

    @pytest.mark.asyncio
    async def test_revision_source_linked_once(self, ledger):
        """A new outlet is attributed; a known one is not duplicated."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        await ledger.add_revision(USER, created.id, update_revision(source_name="Wire A"))
        fact = await ledger.add_revision(
            USER,
            created.id,
            update_revision(previous_value="6%", new_value="7%", source_name="Daily Paper"),
        )

        assert sorted(s.name for s in fact.sources) == ["Daily Paper", "Wire A"]
        assert len(fact.timeline) == 3


class TestAtomicity:
    """A failure in any step of a write leaves nothing behind."""

    @pytest.mark.asyncio
    async def test_create_rolls_back_when_source_step_fails(self, ledger, monkeypatch):
        """No fact or revision survives a failed source upsert."""

        async def broken_upsert(*args, **kwargs):
            raise RuntimeError("source registry down")

        monkeypatch.setattr(ledger.sources, "upsert_source", broken_upsert)

        with pytest.raises(RuntimeError):
            await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        assert await ledger.facts.count_facts() == 0

    @pytest.mark.asyncio
    async def test_add_revision_rolls_back_when_source_step_fails(self, ledger, monkeypatch):
        """The revision and the projection update are undone together."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        async def broken_upsert(*args, **kwargs):
            raise RuntimeError("source registry down")

        monkeypatch.setattr(ledger.sources, "upsert_source", broken_upsert)

        with pytest.raises(RuntimeError):
            await ledger.add_revision(USER, created.id, update_revision(), new_current_value="6%")

        monkeypatch.undo()
        fact = await ledger.get_fact_by_id(created.id)
        assert fact.current_value == "5%"
        assert len(fact.timeline) == 1


class TestDeactivateFact:
    """Tests for soft delete."""

    @pytest.mark.asyncio
    async def test_deactivated_fact_hidden_from_listings(self, ledger):
        """Deactivated facts leave listings but keep their history."""
        created = await ledger.create_fact(USER, fact_attrs(), initial_revision(), SOURCES)

        await ledger.deactivate_fact(USER, created.id)

        page = await ledger.get_facts()
        assert page.total == 0
        assert page.items == []
        fact = await ledger.get_fact_by_id(created.id)
        assert fact is not None
        assert len(fact.timeline) == 1
        assert await ledger.facts.count_facts() == 1

    @pytest.mark.asyncio
    async def test_deactivate_unknown_fact(self, ledger):
        with pytest.raises(FactNotFoundError):
            await ledger.deactivate_fact(USER, "missing")
