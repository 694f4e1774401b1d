from __future__ import annotations

"""Exam & submission repository.

Reads back the data the pass rule needs (submissions + per-exam point totals)
and persists graded submissions together with the options they selected.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from seriesgate.db.models.episode import Episode
from seriesgate.db.models.exam import Exam, Question
from seriesgate.db.models.exam_submission import ExamAnswer, ExamSubmission
from seriesgate.db.session import get_async_db


class ExamRepositoryProtocol:
    async def get_exam(self, exam_id: int, *, for_update: bool = False) -> Optional[Exam]:
        raise NotImplementedError

    async def get_submission(self, submission_id: int) -> Optional[ExamSubmission]:
        raise NotImplementedError

    async def list_series_submissions(self, user_id: str, series_id: int) -> List[ExamSubmission]:
        raise NotImplementedError

    async def exam_point_totals(self, exam_ids: Iterable[int]) -> Dict[int, int]:
        raise NotImplementedError

    async def count_attempts(self, user_id: str, exam_id: int) -> int:
        raise NotImplementedError

    async def add_submission(
        self,
        *,
        user_id: str,
        exam_id: int,
        score: int,
        time_taken_seconds: Optional[int] = None,
        selected: Sequence[Tuple[int, int]] = (),
    ) -> ExamSubmission:
        raise NotImplementedError


class SqlExamRepository(ExamRepositoryProtocol):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_exam(self, exam_id: int, *, for_update: bool = False) -> Optional[Exam]:
        """Load an exam with its questions and options.

        `for_update` locks the exam row until the transaction ends (ignored by
        SQLite) so attempt counting and the insert that follows are serialised.
        """
        stmt = select(Exam).where(Exam.id == exam_id)
        if for_update:
            stmt = stmt.with_for_update()
        rows = await self.session.execute(stmt)
        return rows.scalar_one_or_none()

    async def get_submission(self, submission_id: int) -> Optional[ExamSubmission]:
        stmt = (
            select(ExamSubmission)
            .where(ExamSubmission.id == submission_id)
            .execution_options(populate_existing=True)
        )
        rows = await self.session.execute(stmt)
        return rows.scalar_one_or_none()

    async def list_series_submissions(self, user_id: str, series_id: int) -> List[ExamSubmission]:
        """Every submission by `user_id` to an exam linked to an episode of `series_id`."""
        stmt = (
            select(ExamSubmission)
            .join(Exam, Exam.id == ExamSubmission.exam_id)
            .join(Episode, Episode.id == Exam.episode_id)
            .where(ExamSubmission.user_id == user_id, Episode.series_id == series_id)
            .order_by(ExamSubmission.id.asc())
        )
        rows = await self.session.execute(stmt)
        return list(rows.scalars().all())

    async def exam_point_totals(self, exam_ids: Iterable[int]) -> Dict[int, int]:
        ids = sorted(set(exam_ids))
        if not ids:
            return {}
        stmt = (
            select(Question.exam_id, func.coalesce(func.sum(Question.points), 0))
            .where(Question.exam_id.in_(ids))
            .group_by(Question.exam_id)
        )
        rows = await self.session.execute(stmt)
        totals = {int(exam_id): int(total) for exam_id, total in rows.all()}
        # exams without questions total 0 points
        for exam_id in ids:
            totals.setdefault(exam_id, 0)
        return totals

    async def count_attempts(self, user_id: str, exam_id: int) -> int:
        stmt = select(func.count(ExamSubmission.id)).where(
            ExamSubmission.user_id == user_id,
            ExamSubmission.exam_id == exam_id,
        )
        return int((await self.session.execute(stmt)).scalar_one())

    async def add_submission(
        self,
        *,
        user_id: str,
        exam_id: int,
        score: int,
        time_taken_seconds: Optional[int] = None,
        selected: Sequence[Tuple[int, int]] = (),
    ) -> ExamSubmission:
        submission = ExamSubmission(
            user_id=user_id,
            exam_id=exam_id,
            score=score,
            time_taken_seconds=time_taken_seconds,
        )
        submission.answers = [
            ExamAnswer(question_id=question_id, selected_option_id=option_id)
            for question_id, option_id in selected
        ]
        self.session.add(submission)
        await self.session.flush()
        await self.session.commit()
        await self.session.refresh(submission)
        return submission


def get_exam_repository(db: AsyncSession = Depends(get_async_db)) -> ExamRepositoryProtocol:
    return SqlExamRepository(db)


__all__ = ["ExamRepositoryProtocol", "SqlExamRepository", "get_exam_repository"]
