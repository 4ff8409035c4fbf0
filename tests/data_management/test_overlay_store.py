"""Tests for OverlayStore: per-user bookmark and mute toggles."""

import pytest
import pytest_asyncio

from ledger_system.data_management import Database, FactNotFoundError
from ledger_system.data_management.schemas import ANONYMOUS, Identified
from ledger_system.ledger import FactLedger

SOURCES = [{"name": "Wire A", "tier": "wire"}]


def fact_inputs(headline):
    return (
        {"headline": headline, "current_value": "v1", "category": "geopolitics"},
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
async def fact(ledger):
    return await ledger.create_fact("editor", *fact_inputs("Fact A"))


class TestToggleBookmark:
    """Toggle law: the state after n toggles is (n mod 2 == 1)."""

    @pytest.mark.asyncio
    async def test_toggle_twice_returns_to_unmarked(self, ledger, fact):
        first = await ledger.toggle_bookmark("user-1", fact.id)
        second = await ledger.toggle_bookmark("user-1", fact.id)

        assert first.bookmarked is True
        assert second.bookmarked is False
        assert (await ledger.get_fact_by_id(fact.id, caller="user-1")).is_bookmarked is False

    @pytest.mark.asyncio
    async def test_toggle_three_times(self, ledger, fact):
        for _ in range(3):
            result = await ledger.toggle_bookmark("user-1", fact.id)

        assert result.bookmarked is True
        assert (await ledger.get_fact_by_id(fact.id, caller="user-1")).is_bookmarked is True

    @pytest.mark.asyncio
    async def test_marks_are_per_user(self, ledger, fact):
        await ledger.toggle_bookmark("user-1", fact.id)

        assert (await ledger.get_fact_by_id(fact.id, caller="user-1")).is_bookmarked is True
        assert (await ledger.get_fact_by_id(fact.id, caller="user-2")).is_bookmarked is False
        assert (await ledger.get_fact_by_id(fact.id)).is_bookmarked is False

    @pytest.mark.asyncio
    async def test_toggle_does_not_touch_fact(self, ledger, fact):
        """Overlay marks never alter the fact itself."""
        await ledger.toggle_bookmark("user-1", fact.id)

        after = await ledger.get_fact_by_id(fact.id)
        assert after.last_updated == fact.last_updated
        assert after.timeline == fact.timeline

    @pytest.mark.asyncio
    async def test_unknown_fact(self, ledger):
        with pytest.raises(FactNotFoundError):
            await ledger.toggle_bookmark("user-1", "missing")

    @pytest.mark.asyncio
    async def test_anonymous_caller_rejected(self, ledger, fact):
        with pytest.raises(PermissionError):
            await ledger.toggle_bookmark(ANONYMOUS, fact.id)


class TestToggleMute:
    """Mute follows the same law, independently of bookmarks."""

    @pytest.mark.asyncio
    async def test_mute_independent_of_bookmark(self, ledger, fact):
        muted = await ledger.toggle_mute(Identified(user_id="user-1"), fact.id)

        detail = await ledger.get_fact_by_id(fact.id, caller="user-1")
        assert muted.muted is True
        assert detail.is_muted is True
        assert detail.is_bookmarked is False

    @pytest.mark.asyncio
    async def test_unmute(self, ledger, fact):
        await ledger.toggle_mute("user-1", fact.id)
        result = await ledger.toggle_mute("user-1", fact.id)

        assert result.muted is False
        assert (await ledger.get_fact_by_id(fact.id, caller="user-1")).is_muted is False

    @pytest.mark.asyncio
    async def test_unknown_fact(self, ledger):
        with pytest.raises(FactNotFoundError):
            await ledger.toggle_mute("user-1", "missing")


class TestUserBookmarks:
    """Listing a user's bookmarks."""

    @pytest.mark.asyncio
    async def test_most_recent_bookmark_first(self, ledger, fact):
        other = await ledger.create_fact("editor", *fact_inputs("Fact B"))
        await ledger.toggle_bookmark("user-1", fact.id)
        await ledger.toggle_bookmark("user-1", other.id)

        bookmarks = await ledger.get_user_bookmarks("user-1")

        assert [f.id for f in bookmarks] == [other.id, fact.id]
        assert all(f.is_bookmarked for f in bookmarks)

    @pytest.mark.asyncio
    async def test_cleared_bookmark_not_listed(self, ledger, fact):
        await ledger.toggle_bookmark("user-1", fact.id)
        await ledger.toggle_bookmark("user-1", fact.id)

        assert await ledger.get_user_bookmarks("user-1") == []

    @pytest.mark.asyncio
    async def test_anonymous_caller(self, ledger, fact):
        """The facade requires identity; the engine answers empty for anonymous."""
        with pytest.raises(PermissionError):
            await ledger.get_user_bookmarks(None)

        assert await ledger.queries.get_user_bookmarks(ANONYMOUS) == []
