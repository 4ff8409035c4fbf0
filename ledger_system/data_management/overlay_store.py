"""User overlay store: per-user bookmark and mute marks on facts.

A mark is true when its row exists. Toggling deletes the row to represent
false; no explicit false state is stored. Marks never alter the fact.
"""

from typing import Type, Union

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_system.data_management.database import Database
from ledger_system.data_management.errors import FactNotFoundError
from ledger_system.data_management.orm import Fact, UserBookmark, UserMute, utcnow
from ledger_system.data_management.schemas import BookmarkToggle, MuteToggle

OverlayModel = Union[Type[UserBookmark], Type[UserMute]]


class OverlayStore:
    """Bookmark / mute toggles and presence checks."""

    def __init__(self, database: Database):
        self._db = database
        self.logger = logger.bind(component="OverlayStore")

    async def toggle_bookmark(self, user_id: str, fact_id: str) -> BookmarkToggle:
        """
        Flip the caller's bookmark on a fact.

        Returns:
            BookmarkToggle with the state after the flip

        Raises:
            FactNotFoundError: If the fact does not exist
        """
        state = await self._toggle(UserBookmark, user_id, fact_id)
        return BookmarkToggle(bookmarked=state)

    async def toggle_mute(self, user_id: str, fact_id: str) -> MuteToggle:
        """
        Flip the caller's mute on a fact.

        Returns:
            MuteToggle with the state after the flip

        Raises:
            FactNotFoundError: If the fact does not exist
        """
        state = await self._toggle(UserMute, user_id, fact_id)
        return MuteToggle(muted=state)

    async def is_bookmarked(self, session: AsyncSession, user_id: str, fact_id: str) -> bool:
        return await self._exists(session, UserBookmark, user_id, fact_id)

    async def is_muted(self, session: AsyncSession, user_id: str, fact_id: str) -> bool:
        return await self._exists(session, UserMute, user_id, fact_id)

    async def bookmarked_fact_ids(self, session: AsyncSession, user_id: str) -> list[str]:
        """Fact ids the user bookmarked, most recent bookmark first."""
        result = await session.scalars(
            select(UserBookmark.fact_id)
            .where(UserBookmark.user_id == user_id)
            .order_by(UserBookmark.created_at.desc())
        )
        return list(result)

    async def _toggle(self, model: OverlayModel, user_id: str, fact_id: str) -> bool:
        kind = model.__tablename__
        async with self._db.session(write=True) as session:
            if await session.get(Fact, fact_id) is None:
                raise FactNotFoundError(fact_id)

            removed = await session.execute(
                delete(model).where(model.user_id == user_id, model.fact_id == fact_id)
            )
            if removed.rowcount:
                self.logger.info(f"{kind} cleared", user_id=user_id, fact_id=fact_id)
                return False

            # A concurrent toggle may have inserted first; the mark is set either way
            await session.execute(
                self._db.insert_ignore(model).values(
                    user_id=user_id,
                    fact_id=fact_id,
                    created_at=utcnow(),
                )
            )
            self.logger.info(f"{kind} set", user_id=user_id, fact_id=fact_id)
            return True

    @staticmethod
    async def _exists(
        session: AsyncSession,
        model: OverlayModel,
        user_id: str,
        fact_id: str,
    ) -> bool:
        row = await session.scalar(
            select(model.id)
            .where(model.user_id == user_id, model.fact_id == fact_id)
            .limit(1)
        )
        return row is not None
