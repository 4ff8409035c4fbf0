"""ORM tables for the fact ledger.

Tables:
- facts: aggregate root with the denormalized current state
- fact_revisions: append-only history (never updated or deleted)
- sources: one row per unique outlet name
- fact_sources: which outlets currently back a fact
- fact_relations: directed half-edges of the undirected "related" relation
- user_bookmarks / user_muted: per-user overlay, presence means true

Child rows always reference an existing fact (cascade on purge). User ids are
opaque strings owned by the authentication collaborator.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored time is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class Fact(Base):
    __tablename__ = "facts"

    __table_args__ = (
        sa.Index("idx_facts_category", "category"),
        sa.Index("idx_facts_importance", "importance"),
        sa.Index("idx_facts_confidence", "confidence"),
        sa.Index("idx_facts_last_updated", "last_updated"),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    headline: Mapped[str] = mapped_column(sa.Text, nullable=False)
    current_value: Mapped[str] = mapped_column(sa.Text, nullable=False)
    category: Mapped[str] = mapped_column(sa.String(32), nullable=False)
    importance: Mapped[str] = mapped_column(
        sa.String(16), default="medium", nullable=False
    )
    confidence: Mapped[str] = mapped_column(
        sa.String(16), default="developing", nullable=False
    )
    tags: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(sa.Boolean, default=True, nullable=False)


class Revision(Base):
    __tablename__ = "fact_revisions"

    __table_args__ = (
        sa.Index("idx_revisions_fact_id", "fact_id"),
        sa.Index("idx_revisions_timestamp", "timestamp"),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    fact_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("facts.id", ondelete="CASCADE"), nullable=False
    )
    previous_value: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    new_value: Mapped[str] = mapped_column(sa.Text, nullable=False)
    delta: Mapped[str] = mapped_column(sa.Text, nullable=False)
    why_it_matters: Mapped[str] = mapped_column(sa.Text, nullable=False)
    revision_type: Mapped[str] = mapped_column(
        sa.String(16), default="update", nullable=False
    )
    source_name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    source_url: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    source_tier: Mapped[str] = mapped_column(
        sa.String(16), default="reporting", nullable=False
    )
    timestamp: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )


class Source(Base):
    __tablename__ = "sources"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(sa.Text, unique=True, nullable=False)
    url: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    tier: Mapped[str] = mapped_column(
        sa.String(16), default="reporting", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )


class FactSource(Base):
    __tablename__ = "fact_sources"

    __table_args__ = (
        sa.UniqueConstraint("fact_id", "source_id", name="idx_fact_sources_unique"),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    fact_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("facts.id", ondelete="CASCADE"), nullable=False
    )
    source_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("sources.id", ondelete="CASCADE"), nullable=False
    )
    retrieved_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )


class FactRelation(Base):
    __tablename__ = "fact_relations"

    __table_args__ = (
        sa.UniqueConstraint(
            "fact_id", "related_fact_id", name="idx_fact_relations_unique"
        ),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    fact_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("facts.id", ondelete="CASCADE"), nullable=False
    )
    related_fact_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("facts.id", ondelete="CASCADE"), nullable=False
    )


class UserBookmark(Base):
    __tablename__ = "user_bookmarks"

    __table_args__ = (
        sa.UniqueConstraint("user_id", "fact_id", name="idx_user_bookmarks_unique"),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    fact_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("facts.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )


class UserMute(Base):
    __tablename__ = "user_muted"

    __table_args__ = (
        sa.UniqueConstraint("user_id", "fact_id", name="idx_user_muted_unique"),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    fact_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("facts.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utcnow, nullable=False
    )
