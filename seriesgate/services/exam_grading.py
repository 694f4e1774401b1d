from __future__ import annotations

"""
🧮 SeriesGate — Exam grading & pass rule
=======================================

Pure helpers shared by the series view and the submission endpoint.

Pass rule
---------
    total      = sum(question.points)
    percentage = score / total * 100   (0 when total == 0)
    passed     = percentage >= 50 on ANY submission (not latest, not best)

Grading
-------
- Single choice: full points when the chosen option is correct.
- Multiple choice: 0 if any chosen option is wrong; otherwise
  `round_half_up(len(chosen) * points / len(correct))`.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Set, Union
import math

from seriesgate.core.exceptions import AttemptsExhaustedException, ExamUnavailableException
from seriesgate.schemas.enums import ExamStatus

PASS_THRESHOLD_PERCENT = 50
ANSWER_KEY_PREFIX = "question-"  # form field names: "question-<id>"

AnswerValue = Union[int, str, Sequence[Union[int, str]], None]


class _Submission(Protocol):
    exam_id: Any
    score: int


# ─────────────────────────────────────────────────────────────
# ✅ Pass rule
# ─────────────────────────────────────────────────────────────
def total_points(questions: Iterable[Any]) -> int:
    return sum(int(q.points) for q in questions)


def score_percentage(score: float, total: float) -> float:
    """Score as a percentage of `total`; 0 for exams without points."""
    if total <= 0:
        return 0.0
    return (score / total) * 100


def is_passing(score: float, total: float) -> bool:
    return score_percentage(score, total) >= PASS_THRESHOLD_PERCENT


def passed_exam_ids(submissions: Iterable[_Submission], exam_totals: Mapping[Any, int]) -> Set[Any]:
    """Exam ids for which at least one submission reaches the pass threshold.

    `exam_totals` maps exam id → total points; exams missing from it count as
    0 points and therefore never pass.
    """
    passed: Set[Any] = set()
    for sub in submissions:
        if sub.exam_id in passed:
            continue
        if is_passing(sub.score, exam_totals.get(sub.exam_id, 0)):
            passed.add(sub.exam_id)
    return passed


# ─────────────────────────────────────────────────────────────
# 📝 Grading
# ─────────────────────────────────────────────────────────────
@dataclass
class GradeResult:
    score: int
    total_points: int
    # (question_id, option_id) for options that exist on the question
    selected: List[tuple[int, int]] = field(default_factory=list)

    @property
    def percentage(self) -> float:
        return score_percentage(self.score, self.total_points)

    @property
    def passed(self) -> bool:
        return is_passing(self.score, self.total_points)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_option_ids(raw: AnswerValue) -> List[int]:
    if raw is None:
        return []
    items = raw if isinstance(raw, (list, tuple)) else [raw]
    ids: List[int] = []
    for item in items:
        if item is None or item == "":
            continue
        try:
            ids.append(int(item))
        except (TypeError, ValueError):
            continue
    return ids


def grade_answers(questions: Iterable[Any], answers: Mapping[Any, AnswerValue]) -> GradeResult:
    """Score `answers` (question id → option id(s)) against `questions`.

    Questions are duck-typed: `id`, `points`, `is_multiple_choice` and
    `options` (each with `id` and `is_correct`). Answer keys may be ints,
    numeric strings or `"question-<id>"` form names.
    """
    normalized: Dict[int, AnswerValue] = {}
    for key, value in answers.items():
        if isinstance(key, str) and key.startswith(ANSWER_KEY_PREFIX):
            key = key[len(ANSWER_KEY_PREFIX):]
        try:
            normalized[int(key)] = value
        except (TypeError, ValueError):
            continue

    score = 0
    total = 0
    selected: List[tuple[int, int]] = []

    for question in questions:
        points = int(question.points)
        total += points
        option_ids = {opt.id for opt in question.options}
        correct_ids = {opt.id for opt in question.options if opt.is_correct}
        chosen = _as_option_ids(normalized.get(question.id))

        if question.is_multiple_choice:
            if chosen and correct_ids and not any(cid not in correct_ids for cid in chosen):
                score += max(0, _round_half_up(len(chosen) * points / len(correct_ids)))
            selected.extend((question.id, cid) for cid in chosen if cid in option_ids)
        else:
            choice = chosen[0] if chosen else None
            if choice is not None:
                if choice in correct_ids:
                    score += points
                if choice in option_ids:
                    selected.append((question.id, choice))

    return GradeResult(score=score, total_points=total, selected=selected)


# ─────────────────────────────────────────────────────────────
# 🚪 Availability
# ─────────────────────────────────────────────────────────────
def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def ensure_exam_open(
    exam: Any,
    *,
    attempts_used: int,
    now: Optional[datetime] = None,
    user_id: Optional[str] = None,
) -> None:
    """Raise if `exam` cannot take another submission right now."""
    now = _aware(now or datetime.now(timezone.utc))

    if exam.status != ExamStatus.ACTIVE:
        raise ExamUnavailableException(exam_id=exam.id, reason="This exam is not active.")
    if exam.start_date is not None and now < _aware(exam.start_date):
        raise ExamUnavailableException(exam_id=exam.id, reason="This exam has not started yet.")
    if exam.end_date is not None and now > _aware(exam.end_date):
        raise ExamUnavailableException(exam_id=exam.id, reason="This exam has already ended.")

    allowed = int(exam.attempts_allowed or 0)
    if allowed > 0 and attempts_used >= allowed:
        raise AttemptsExhaustedException(exam_id=exam.id, attempts_allowed=allowed, user_id=user_id)


__all__ = [
    "PASS_THRESHOLD_PERCENT",
    "GradeResult",
    "total_points",
    "score_percentage",
    "is_passing",
    "passed_exam_ids",
    "grade_answers",
    "ensure_exam_open",
]
