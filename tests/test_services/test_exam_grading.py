# tests/test_services/test_exam_grading.py

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from seriesgate.core.exceptions import AttemptsExhaustedException, ExamUnavailableException
from seriesgate.schemas.enums import ExamStatus
from seriesgate.services.exam_grading import (
    PASS_THRESHOLD_PERCENT,
    ensure_exam_open,
    grade_answers,
    is_passing,
    passed_exam_ids,
    score_percentage,
    total_points,
)


@dataclass
class Opt:
    id: int
    is_correct: bool


@dataclass
class Q:
    id: int
    points: int
    options: List[Opt]
    is_multiple_choice: bool = False


@dataclass
class Sub:
    exam_id: int
    score: int


@dataclass
class ExamStub:
    id: int = 1
    status: ExamStatus = ExamStatus.ACTIVE
    attempts_allowed: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    questions: list = field(default_factory=list)


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# ─────────────────────────────────────────────────────────────
# Pass rule
# ─────────────────────────────────────────────────────────────

def test_threshold_is_fifty_percent():
    assert PASS_THRESHOLD_PERCENT == 50
    assert is_passing(50, 100) is True
    assert is_passing(49, 100) is False


def test_zero_total_never_passes():
    assert score_percentage(0, 0) == 0
    assert is_passing(0, 0) is False


def test_total_points_sums_questions():
    assert total_points([Q(1, 3, []), Q(2, 7, [])]) == 10


def test_any_submission_passes():
    subs = [Sub(exam_id=7, score=30), Sub(exam_id=7, score=60)]
    assert passed_exam_ids(subs, {7: 100}) == {7}


def test_latest_failing_attempt_does_not_revoke_pass():
    subs = [Sub(exam_id=7, score=80), Sub(exam_id=7, score=0)]
    assert passed_exam_ids(subs, {7: 100}) == {7}


def test_exam_missing_from_totals_never_passes():
    assert passed_exam_ids([Sub(exam_id=3, score=5)], {}) == set()


def test_passed_ids_per_exam():
    subs = [Sub(1, 10), Sub(2, 1), Sub(3, 3)]
    assert passed_exam_ids(subs, {1: 20, 2: 10, 3: 4}) == {1, 3}


# ─────────────────────────────────────────────────────────────
# Grading
# ─────────────────────────────────────────────────────────────

def _exam_questions():
    return [
        Q(1, 10, [Opt(11, True), Opt(12, False)]),
        Q(2, 6, [Opt(21, True), Opt(22, True), Opt(23, True), Opt(24, False)], is_multiple_choice=True),
    ]


def test_single_choice_correct_and_wrong():
    questions = _exam_questions()[:1]
    assert grade_answers(questions, {1: 11}).score == 10
    assert grade_answers(questions, {1: 12}).score == 0
    assert grade_answers(questions, {}).score == 0


def test_multiple_choice_partial_credit_rounds_half_up():
    questions = _exam_questions()[1:]
    # 1 of 3 correct on 6 points → 2
    assert grade_answers(questions, {2: [21]}).score == 2
    # 2 of 3 → 4
    assert grade_answers(questions, {2: [21, 22]}).score == 4
    assert grade_answers(questions, {2: [21, 22, 23]}).score == 6


def test_multiple_choice_rounding_at_half():
    question = Q(5, 3, [Opt(1, True), Opt(2, True)], is_multiple_choice=True)
    # 1 * 3 / 2 = 1.5 → 2
    assert grade_answers([question], {5: [1]}).score == 2


def test_multiple_choice_any_wrong_option_scores_zero():
    questions = _exam_questions()[1:]
    assert grade_answers(questions, {2: [21, 22, 24]}).score == 0


def test_unknown_option_counts_as_wrong():
    questions = _exam_questions()[1:]
    assert grade_answers(questions, {2: [21, 999]}).score == 0


def test_answer_keys_accept_strings_and_form_prefix():
    result = grade_answers(_exam_questions(), {"1": "11", "question-2": ["21", "22", "23"]})
    assert result.score == 16
    assert result.total_points == 16
    assert result.percentage == 100
    assert result.passed is True


def test_grade_result_records_selected_options():
    result = grade_answers(_exam_questions(), {1: 12, 2: [21, 22]})
    assert result.selected == [(1, 12), (2, 21), (2, 22)]
    assert result.passed is False  # 4 / 16


def test_unknown_options_are_graded_but_not_recorded():
    result = grade_answers(_exam_questions(), {1: 999, 2: [21, 998]})
    assert result.score == 0
    assert result.selected == [(2, 21)]


# ─────────────────────────────────────────────────────────────
# Availability
# ─────────────────────────────────────────────────────────────

def test_open_exam_passes_checks():
    ensure_exam_open(ExamStub(), attempts_used=10, now=NOW)


@pytest.mark.parametrize("status", [ExamStatus.DRAFT, ExamStatus.INACTIVE])
def test_inactive_exam_rejected(status):
    with pytest.raises(ExamUnavailableException) as ei:
        ensure_exam_open(ExamStub(status=status), attempts_used=0, now=NOW)
    assert ei.value.status_code == 409
    assert "not active" in ei.value.detail


def test_window_bounds():
    with pytest.raises(ExamUnavailableException, match="not started"):
        ensure_exam_open(ExamStub(start_date=NOW + timedelta(hours=1)), attempts_used=0, now=NOW)
    with pytest.raises(ExamUnavailableException, match="already ended"):
        ensure_exam_open(ExamStub(end_date=NOW - timedelta(seconds=1)), attempts_used=0, now=NOW)


def test_naive_window_dates_are_treated_as_utc():
    naive_start = datetime(2025, 6, 1, 11, 0)
    ensure_exam_open(ExamStub(start_date=naive_start), attempts_used=0, now=NOW)


def test_attempt_cap():
    exam = ExamStub(attempts_allowed=2)
    ensure_exam_open(exam, attempts_used=1, now=NOW)
    with pytest.raises(AttemptsExhaustedException) as ei:
        ensure_exam_open(exam, attempts_used=2, now=NOW, user_id="u1")
    assert ei.value.details == {"exam_id": 1, "attempts_allowed": 2}
