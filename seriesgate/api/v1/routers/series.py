# seriesgate/api/v1/routers/series.py
# ╔══════════════════════════════════════════════════════════════════════════╗
# ║ 📺 SeriesGate · Series API                                               ║
# ║                                                                          ║
# ║ Endpoints (optional Bearer token):                                       ║
# ║  - GET /series                                 → Series ordered by title ║
# ║  - GET /series/{series_id}                     → Detail + lock flags     ║
# ║  - GET /series/{series_id}/episodes/{id}       → Episode (403 if locked) ║
# ╠──────────────────────────────────────────────────────────────────────────╣
# ║ Lock flags are computed per request for the viewer; for anonymous        ║
# ║ viewers every `is_locked_by_default` episode is locked.                  ║
# ║ Responses are viewer-specific → `Cache-Control: private, no-store`.      ║
# ╚══════════════════════════════════════════════════════════════════════════╝

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Response

from seriesgate.core.dependencies import get_viewer
from seriesgate.db.models.episode import Episode
from seriesgate.repositories.exams import ExamRepositoryProtocol, get_exam_repository
from seriesgate.repositories.series import SeriesRepositoryProtocol, get_series_repository
from seriesgate.schemas.series import EpisodeDetail, EpisodeSummary, SeriesDetail, SeriesSummary
from seriesgate.services.episode_access import EpisodeLock, Viewer
from seriesgate.services.series_view import load_episode, load_series_view

router = APIRouter(tags=["Series"])


# ─────────────────────────────────────────────────────────────────────────────
# 🧩 Helpers
# ─────────────────────────────────────────────────────────────────────────────
def _private(response: Response) -> None:
    response.headers["Cache-Control"] = "private, no-store"


def _episode_fields(lock: EpisodeLock[Episode]) -> dict:
    e = lock.episode
    return {
        "id": e.id,
        "title": e.title,
        "order_in_series": e.order_in_series,
        "status": e.status,
        "author_id": e.author_id,
        "is_locked": lock.is_locked,
        "is_locked_by_default": bool(e.is_locked_by_default),
        "requires_exam_to_unlock": bool(e.requires_exam_to_unlock),
        "exam_id": e.exam.id if e.exam is not None else None,
    }


# ─────────────────────────────────────────────────────────────────────────────
# 📚 List series
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/series", response_model=List[SeriesSummary], summary="List series")
async def list_series(
    series_repo: SeriesRepositoryProtocol = Depends(get_series_repository),
) -> List[SeriesSummary]:
    rows = await series_repo.list_series()
    return [SeriesSummary(id=s.id, title=s.title, author_id=s.author_id) for s in rows]


# ─────────────────────────────────────────────────────────────────────────────
# 🔒 Series detail with per-viewer lock flags
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/series/{series_id}", response_model=SeriesDetail, summary="Series detail with episode locks")
async def get_series(
    response: Response,
    series_id: int = Path(..., ge=1),
    viewer: Viewer = Depends(get_viewer),
    series_repo: SeriesRepositoryProtocol = Depends(get_series_repository),
    exam_repo: ExamRepositoryProtocol = Depends(get_exam_repository),
) -> SeriesDetail:
    view = await load_series_view(series_repo, exam_repo, series_id=series_id, viewer=viewer)
    _private(response)
    return SeriesDetail(
        id=view.series.id,
        title=view.series.title,
        author_id=view.series.author_id,
        episodes=[EpisodeSummary(**_episode_fields(lock)) for lock in view.episodes],
        passed_exam_ids=sorted(view.passed_exam_ids),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 🎬 Single episode (refuses locked ones)
# ─────────────────────────────────────────────────────────────────────────────
@router.get(
    "/series/{series_id}/episodes/{episode_id}",
    response_model=EpisodeDetail,
    summary="Episode content (403 when locked)",
)
async def get_episode(
    response: Response,
    series_id: int = Path(..., ge=1),
    episode_id: int = Path(..., ge=1),
    viewer: Viewer = Depends(get_viewer),
    series_repo: SeriesRepositoryProtocol = Depends(get_series_repository),
    exam_repo: ExamRepositoryProtocol = Depends(get_exam_repository),
) -> EpisodeDetail:
    lock = await load_episode(
        series_repo, exam_repo, series_id=series_id, episode_id=episode_id, viewer=viewer
    )
    _private(response)
    return EpisodeDetail(
        **_episode_fields(lock),
        series_id=lock.episode.series_id,
        content=lock.episode.content,
    )
