# seriesgate/db/base.py
"""
SeriesGate — SQLAlchemy Base registry
=====================================

Import all ORM models so their tables are registered on `Base.metadata`
(Alembic autogeneration, `create_all` in tests).

Tip: Keep this file import-only; no runtime logic.
"""

from seriesgate.db.base_class import Base

from seriesgate.db.models.user import User
from seriesgate.db.models.series import Series
from seriesgate.db.models.episode import Episode
from seriesgate.db.models.exam import Exam, Question, QuestionOption
from seriesgate.db.models.exam_submission import ExamAnswer, ExamSubmission

__all__ = [
    "Base",
    "User",
    "Series",
    "Episode",
    "Exam",
    "Question",
    "QuestionOption",
    "ExamSubmission",
    "ExamAnswer",
]
