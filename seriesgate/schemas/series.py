from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from seriesgate.schemas.enums import EpisodeStatus


class SeriesSummary(BaseModel):
    id: int
    title: str
    author_id: Optional[str] = None


class EpisodeSummary(BaseModel):
    id: int
    title: str
    order_in_series: int
    status: EpisodeStatus
    author_id: Optional[str] = None
    is_locked: bool = Field(..., description="Computed per viewer; never stored.")
    is_locked_by_default: bool
    requires_exam_to_unlock: bool
    exam_id: Optional[int] = None


class EpisodeDetail(EpisodeSummary):
    series_id: int
    content: Optional[str] = None


class SeriesDetail(BaseModel):
    id: int
    title: str
    author_id: Optional[str] = None
    episodes: List[EpisodeSummary] = []
    passed_exam_ids: List[int] = Field(default_factory=list, description="Exams the viewer has passed (sorted).")
