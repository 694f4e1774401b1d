from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field


class SubmissionCreate(BaseModel):
    answers: Dict[str, Union[int, List[int], None]] = Field(
        default_factory=dict,
        description='Question id (or "question-<id>") → selected option id(s).',
    )
    time_taken_seconds: Optional[int] = Field(None, ge=0)


class SubmissionResult(BaseModel):
    id: int
    exam_id: int
    score: int
    total_points: int
    percentage: float
    passed: bool
    attempt_number: int
    time_taken_seconds: Optional[int] = None


# Taker view: option correctness is never exposed.
class TakerOption(BaseModel):
    id: int
    text: str


class TakerQuestion(BaseModel):
    id: int
    text: str
    points: int
    is_multiple_choice: bool
    options: List[TakerOption] = Field(default_factory=list)


class ExamForTaker(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    attempts_allowed: int
    attempts_used: int
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total_points: int
    questions: List[TakerQuestion] = Field(default_factory=list)


class SelectedAnswer(BaseModel):
    question_id: int
    selected_option_id: int


class SubmissionDetail(BaseModel):
    id: int
    exam_id: int
    user_id: str
    score: int
    total_points: int
    percentage: float
    passed: bool
    time_taken_seconds: Optional[int] = None
    submitted_at: Optional[datetime] = None
    answers: List[SelectedAnswer] = Field(default_factory=list)
