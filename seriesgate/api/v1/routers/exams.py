# seriesgate/api/v1/routers/exams.py
"""
SeriesGate · Exams
==================

- GET  /exams/{exam_id}                     : questions & options for a taker
- POST /exams/{exam_id}/submissions         : grade answers and store an attempt
- GET  /exams/submissions/{submission_id}   : stored result (owner or super-admin)

Requires a Bearer access token. Taking and submitting reject with 409 when the
exam is not open (inactive, before start, after end) or the attempt cap is
reached. Option correctness is never sent to takers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status

from seriesgate.core.dependencies import require_user
from seriesgate.repositories.exams import ExamRepositoryProtocol, get_exam_repository
from seriesgate.schemas.exams import (
    ExamForTaker,
    SelectedAnswer,
    SubmissionCreate,
    SubmissionDetail,
    SubmissionResult,
    TakerOption,
    TakerQuestion,
)
from seriesgate.services.episode_access import AuthenticatedUser
from seriesgate.services.exam_grading import total_points
from seriesgate.services.series_view import load_exam_for_taker, load_submission, submit_exam

router = APIRouter(tags=["Exams"])


def _private(response: Response) -> None:
    response.headers["Cache-Control"] = "private, no-store"


@router.get(
    "/exams/{exam_id}",
    response_model=ExamForTaker,
    summary="Fetch an open exam for taking",
)
async def get_exam_for_taker(
    response: Response,
    exam_id: int = Path(..., ge=1),
    user: AuthenticatedUser = Depends(require_user),
    exam_repo: ExamRepositoryProtocol = Depends(get_exam_repository),
) -> ExamForTaker:
    taker = await load_exam_for_taker(exam_repo, exam_id=exam_id, user=user)
    exam = taker.exam
    _private(response)
    return ExamForTaker(
        id=exam.id,
        title=exam.title,
        description=exam.description,
        duration_minutes=exam.duration_minutes,
        attempts_allowed=exam.attempts_allowed,
        attempts_used=taker.attempts_used,
        start_date=exam.start_date,
        end_date=exam.end_date,
        total_points=total_points(exam.questions),
        questions=[
            TakerQuestion(
                id=q.id,
                text=q.text,
                points=q.points,
                is_multiple_choice=bool(q.is_multiple_choice),
                options=[TakerOption(id=o.id, text=o.text) for o in q.options],
            )
            for q in exam.questions
        ],
    )


@router.post(
    "/exams/{exam_id}/submissions",
    response_model=SubmissionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Submit answers for an exam",
)
async def create_submission(
    payload: SubmissionCreate,
    exam_id: int = Path(..., ge=1),
    user: AuthenticatedUser = Depends(require_user),
    exam_repo: ExamRepositoryProtocol = Depends(get_exam_repository),
) -> SubmissionResult:
    outcome = await submit_exam(
        exam_repo,
        exam_id=exam_id,
        user=user,
        answers=payload.answers,
        time_taken_seconds=payload.time_taken_seconds,
    )
    return SubmissionResult(
        id=outcome.submission.id,
        exam_id=exam_id,
        score=outcome.grade.score,
        total_points=outcome.grade.total_points,
        percentage=round(outcome.grade.percentage, 2),
        passed=outcome.grade.passed,
        attempt_number=outcome.attempt_number,
        time_taken_seconds=outcome.submission.time_taken_seconds,
    )


@router.get(
    "/exams/submissions/{submission_id}",
    response_model=SubmissionDetail,
    summary="Read back a stored submission",
)
async def get_submission(
    response: Response,
    submission_id: int = Path(..., ge=1),
    user: AuthenticatedUser = Depends(require_user),
    exam_repo: ExamRepositoryProtocol = Depends(get_exam_repository),
) -> SubmissionDetail:
    report = await load_submission(exam_repo, submission_id=submission_id, user=user)
    sub = report.submission
    _private(response)
    return SubmissionDetail(
        id=sub.id,
        exam_id=sub.exam_id,
        user_id=str(sub.user_id),
        score=sub.score,
        total_points=report.total_points,
        percentage=round(report.percentage, 2),
        passed=report.passed,
        time_taken_seconds=sub.time_taken_seconds,
        submitted_at=sub.submitted_at,
        answers=[
            SelectedAnswer(question_id=a.question_id, selected_option_id=a.selected_option_id)
            for a in sub.answers
        ],
    )
