from __future__ import annotations

"""
📺 SeriesGate — Series
======================

An ordered, multi-part work. Episodes hang off a series and are ordered by
their author-assigned `order_in_series`.

Relationships
-------------
- `episodes` → Episode (children, ordered by `order_in_series`) [back_populates="series"]
"""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from seriesgate.db.base_class import Base, TimestampMixin


class Series(TimestampMixin, Base):
    """Series container; `title` is unique across the catalog."""

    __tablename__ = "series"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, unique=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    episodes = relationship(
        "Episode",
        back_populates="series",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="Episode.order_in_series",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Series id={self.id} title={self.title!r}>"
