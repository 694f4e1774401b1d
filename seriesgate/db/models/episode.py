from __future__ import annotations

"""
🎬 SeriesGate — Episode
=======================

A single post published as part of a **Series**.

Gating fields
-------------
• `is_locked_by_default` — whether the episode can be gated at all.
• `requires_exam_to_unlock` — whether passing *this* episode's exam is what
  unlocks the **next** episode.
• `exam` — optional linked exam (one per episode).

Lock state itself is never stored; it is computed per request by
`seriesgate.services.episode_access`.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    false,
)
from sqlalchemy.orm import relationship

from seriesgate.db.base_class import Base, TimestampMixin
from seriesgate.schemas.enums import EpisodeStatus


class Episode(TimestampMixin, Base):
    """One ordered unit of content within a series."""

    __tablename__ = "episodes"

    # ── Identity ──────────────────────────────────────────────
    id = Column(Integer, primary_key=True, autoincrement=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # ── Content ───────────────────────────────────────────────
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    order_in_series = Column(Integer, nullable=False, doc="Author-assigned position (dense, unique per series).")
    status = Column(
        SAEnum(EpisodeStatus, name="episode_status"),
        nullable=False,
        default=EpisodeStatus.PUBLISHED,
        server_default=EpisodeStatus.PUBLISHED.value,
    )

    # ── Gating ────────────────────────────────────────────────
    is_locked_by_default = Column(Boolean, nullable=False, default=False, server_default=false())
    requires_exam_to_unlock = Column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (
        UniqueConstraint("series_id", "order_in_series", name="uq_episodes_series_order"),
        CheckConstraint("order_in_series >= 1", name="order_ge_1"),
        Index("ix_episodes_series_status", "series_id", "status"),
    )

    # ── Relationships ─────────────────────────────────────────
    series = relationship("Series", back_populates="episodes", lazy="selectin")
    exam = relationship(
        "Exam",
        back_populates="episode",
        uselist=False,
        lazy="selectin",
        passive_deletes=True,
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<Episode id={self.id} series_id={self.series_id} #{self.order_in_series} "
            f"locked_by_default={self.is_locked_by_default}>"
        )
