from seriesgate.db.models.user import User
from seriesgate.db.models.series import Series
from seriesgate.db.models.episode import Episode
from seriesgate.db.models.exam import Exam, Question, QuestionOption
from seriesgate.db.models.exam_submission import ExamAnswer, ExamSubmission

__all__ = [
    "User",
    "Series",
    "Episode",
    "Exam",
    "Question",
    "QuestionOption",
    "ExamSubmission",
    "ExamAnswer",
]
