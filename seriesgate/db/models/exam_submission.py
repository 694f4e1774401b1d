from __future__ import annotations

"""
🧾 SeriesGate — ExamSubmission, ExamAnswer
==========================================

One graded attempt by a user at an exam. A user may hold several submissions
for the same exam; the number of rows is the attempt count, and any single
passing row marks the exam as passed.

`ExamAnswer` keeps the options picked in that attempt (one row per selected
option, so a multiple-choice question can have several).
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import relationship

from seriesgate.db.base_class import Base


class ExamSubmission(Base):
    __tablename__ = "exam_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    exam_id = Column(Integer, ForeignKey("exams.id", ondelete="CASCADE"), nullable=False)
    score = Column(Integer, nullable=False, default=0)
    time_taken_seconds = Column(Integer, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("score >= 0", name="score_nonneg"),
        Index("ix_exam_submissions_user_exam", "user_id", "exam_id"),
    )

    answers = relationship(
        "ExamAnswer",
        back_populates="submission",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ExamAnswer.id",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ExamSubmission id={self.id} user_id={self.user_id} exam_id={self.exam_id} score={self.score}>"


class ExamAnswer(Base):
    __tablename__ = "exam_answers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(
        Integer,
        ForeignKey("exam_submissions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    selected_option_id = Column(Integer, ForeignKey("question_options.id", ondelete="CASCADE"), nullable=False)

    submission = relationship("ExamSubmission", back_populates="answers")
