from __future__ import annotations

"""
📺 SeriesGate — Series view & exam submission flows
==================================================

Glue between the repositories and the pure evaluators:

- `load_series_view`    → series + episodes with per-viewer lock flags
- `load_episode`        → one episode, refusing locked ones
- `load_exam_for_taker` → an open exam plus the viewer's attempts so far
- `submit_exam`         → grade & persist an attempt (window + attempt cap)
- `load_submission`     → a stored result, for its owner or a super-admin

Everything a view needs is read inside one snapshot (`begin_snapshot`) so the
lock flags never mix episode rows and submissions from different commits.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional, Set

from loguru import logger

from seriesgate.core.exceptions import (
    EpisodeLockedException,
    NotFoundException,
    SubmissionAccessDeniedException,
)
from seriesgate.db.models.episode import Episode
from seriesgate.db.models.exam import Exam
from seriesgate.db.models.exam_submission import ExamSubmission
from seriesgate.db.models.series import Series
from seriesgate.repositories.exams import ExamRepositoryProtocol
from seriesgate.repositories.series import SeriesRepositoryProtocol
from seriesgate.schemas.enums import UserRole
from seriesgate.services.episode_access import (
    AuthenticatedUser,
    EpisodeLock,
    Viewer,
    compute_episode_locks,
)
from seriesgate.services.exam_grading import (
    GradeResult,
    ensure_exam_open,
    grade_answers,
    is_passing,
    passed_exam_ids,
    score_percentage,
)


@dataclass
class SeriesView:
    series: Series
    episodes: List[EpisodeLock[Episode]]
    passed_exam_ids: Set[int]


@dataclass
class SubmissionOutcome:
    submission: ExamSubmission
    grade: GradeResult
    attempt_number: int


@dataclass
class TakerExam:
    exam: Exam
    attempts_used: int


@dataclass
class SubmissionReport:
    submission: ExamSubmission
    total_points: int

    @property
    def percentage(self) -> float:
        return score_percentage(self.submission.score, self.total_points)

    @property
    def passed(self) -> bool:
        return is_passing(self.submission.score, self.total_points)


async def _passed_exam_ids_for(exams: ExamRepositoryProtocol, viewer: Viewer, series_id: int) -> Set[int]:
    if not isinstance(viewer, AuthenticatedUser):
        return set()
    submissions = await exams.list_series_submissions(viewer.id, series_id)
    if not submissions:
        return set()
    totals = await exams.exam_point_totals({s.exam_id for s in submissions})
    return passed_exam_ids(submissions, totals)


async def load_series_view(
    series_repo: SeriesRepositoryProtocol,
    exam_repo: ExamRepositoryProtocol,
    *,
    series_id: int,
    viewer: Viewer,
) -> SeriesView:
    await series_repo.begin_snapshot()

    series = await series_repo.get_series(series_id)
    if series is None:
        raise NotFoundException(resource="Series", resource_id=series_id)

    episodes = await series_repo.list_episodes(series_id)
    passed = await _passed_exam_ids_for(exam_repo, viewer, series_id)
    locks = compute_episode_locks(episodes, viewer, passed)

    logger.bind(series_id=series_id, viewer=getattr(viewer, "id", None)).debug(
        "series view: {} episodes, {} locked, {} exams passed",
        len(locks),
        sum(1 for lock in locks if lock.is_locked),
        len(passed),
    )
    return SeriesView(series=series, episodes=locks, passed_exam_ids=passed)


async def load_episode(
    series_repo: SeriesRepositoryProtocol,
    exam_repo: ExamRepositoryProtocol,
    *,
    series_id: int,
    episode_id: int,
    viewer: Viewer,
) -> EpisodeLock[Episode]:
    """Return the episode's lock entry, raising 404 if absent and 403 if locked."""
    view = await load_series_view(series_repo, exam_repo, series_id=series_id, viewer=viewer)
    for lock in view.episodes:
        if lock.episode.id == episode_id:
            if lock.is_locked:
                raise EpisodeLockedException(episode_id=episode_id, user_id=getattr(viewer, "id", None))
            return lock
    raise NotFoundException(resource="Episode", resource_id=episode_id)


async def submit_exam(
    exam_repo: ExamRepositoryProtocol,
    *,
    exam_id: int,
    user: AuthenticatedUser,
    answers: Mapping[Any, Any],
    time_taken_seconds: Optional[int] = None,
    now: Optional[datetime] = None,
) -> SubmissionOutcome:
    exam = await exam_repo.get_exam(exam_id, for_update=True)
    if exam is None:
        raise NotFoundException(resource="Exam", resource_id=exam_id)

    attempts_used = await exam_repo.count_attempts(user.id, exam_id)
    ensure_exam_open(exam, attempts_used=attempts_used, now=now, user_id=user.id)

    grade = grade_answers(exam.questions, answers)
    submission = await exam_repo.add_submission(
        user_id=user.id,
        exam_id=exam_id,
        score=grade.score,
        time_taken_seconds=time_taken_seconds,
        selected=grade.selected,
    )

    logger.bind(exam_id=exam_id, user_id=user.id).info(
        "exam submission stored: score={}/{} passed={} attempt={}",
        grade.score,
        grade.total_points,
        grade.passed,
        attempts_used + 1,
    )
    return SubmissionOutcome(submission=submission, grade=grade, attempt_number=attempts_used + 1)



async def load_exam_for_taker(
    exam_repo: ExamRepositoryProtocol,
    *,
    exam_id: int,
    user: AuthenticatedUser,
    now: Optional[datetime] = None,
) -> TakerExam:
    """Return the exam if `user` could submit to it right now (same checks as `submit_exam`)."""
    exam = await exam_repo.get_exam(exam_id)
    if exam is None:
        raise NotFoundException(resource="Exam", resource_id=exam_id)

    attempts_used = await exam_repo.count_attempts(user.id, exam_id)
    ensure_exam_open(exam, attempts_used=attempts_used, now=now, user_id=user.id)
    return TakerExam(exam=exam, attempts_used=attempts_used)


async def load_submission(
    exam_repo: ExamRepositoryProtocol,
    *,
    submission_id: int,
    user: AuthenticatedUser,
) -> SubmissionReport:
    submission = await exam_repo.get_submission(submission_id)
    if submission is None:
        raise NotFoundException(resource="Submission", resource_id=submission_id)
    if str(submission.user_id) != str(user.id) and user.role != UserRole.SUPER_ADMIN:
        raise SubmissionAccessDeniedException(submission_id=submission_id, user_id=user.id)

    totals = await exam_repo.exam_point_totals([submission.exam_id])
    return SubmissionReport(submission=submission, total_points=totals.get(submission.exam_id, 0))


__all__ = [
    "SeriesView",
    "SubmissionOutcome",
    "TakerExam",
    "SubmissionReport",
    "load_series_view",
    "load_episode",
    "load_exam_for_taker",
    "submit_exam",
    "load_submission",
]
