from __future__ import annotations

"""Series & episode read repository.

All methods are read-only. `begin_snapshot()` should be awaited before the
first query of a request so the series, its episodes and the viewer's exam
submissions come from one consistent snapshot.
"""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seriesgate.db.models.episode import Episode
from seriesgate.db.models.series import Series
from seriesgate.db.session import get_async_db, snapshot_read
from seriesgate.schemas.enums import EpisodeStatus


# Protocol-like documentation for the expected interface.


class SeriesRepositoryProtocol:
    async def begin_snapshot(self) -> None:
        raise NotImplementedError

    async def list_series(self) -> List[Series]:
        raise NotImplementedError

    async def get_series(self, series_id: int) -> Optional[Series]:
        raise NotImplementedError

    async def list_episodes(self, series_id: int) -> List[Episode]:
        raise NotImplementedError


class SqlSeriesRepository(SeriesRepositoryProtocol):
    """SQLAlchemy-backed implementation bound to one request session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def begin_snapshot(self) -> None:
        await snapshot_read(self.session)

    async def list_series(self) -> List[Series]:
        rows = await self.session.execute(select(Series).order_by(Series.title.asc()))
        return list(rows.scalars().all())

    async def get_series(self, series_id: int) -> Optional[Series]:
        rows = await self.session.execute(select(Series).where(Series.id == series_id))
        return rows.scalar_one_or_none()

    async def list_episodes(self, series_id: int) -> List[Episode]:
        """Episodes of a series sorted by `order_in_series`, minus those pending deletion."""
        stmt = (
            select(Episode)
            .where(
                Episode.series_id == series_id,
                Episode.status != EpisodeStatus.PENDING_DELETION,
            )
            .order_by(Episode.order_in_series.asc(), Episode.id.asc())
        )
        rows = await self.session.execute(stmt)
        return list(rows.scalars().all())


def get_series_repository(db: AsyncSession = Depends(get_async_db)) -> SeriesRepositoryProtocol:
    return SqlSeriesRepository(db)


__all__ = ["SeriesRepositoryProtocol", "SqlSeriesRepository", "get_series_repository"]
