from __future__ import annotations

"""
📝 SeriesGate — Exam, Question, QuestionOption
=============================================

A scored quiz optionally attached to one episode. An exam's total is the sum
of its questions' `points`; the pass rule lives in
`seriesgate.services.exam_grading`.

Window & attempts
-----------------
• `status` must be ACTIVE to accept submissions.
• `start_date` / `end_date` bound the submission window when set.
• `attempts_allowed == 0` means unlimited attempts.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    false,
)
from sqlalchemy.orm import relationship

from seriesgate.db.base_class import Base, TimestampMixin
from seriesgate.schemas.enums import ExamStatus


class Exam(TimestampMixin, Base):
    """Quiz used as the unlock gate for the episode after `episode`."""

    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    episode_id = Column(
        Integer,
        ForeignKey("episodes.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        SAEnum(ExamStatus, name="exam_status"),
        nullable=False,
        default=ExamStatus.DRAFT,
        server_default=ExamStatus.DRAFT.value,
    )
    duration_minutes = Column(Integer, nullable=True)
    attempts_allowed = Column(Integer, nullable=False, default=1, server_default="1")
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("attempts_allowed >= 0", name="attempts_nonneg"),
        CheckConstraint("(end_date IS NULL) OR (start_date IS NULL) OR (end_date >= start_date)", name="window_order"),
    )

    episode = relationship("Episode", back_populates="exam", lazy="selectin")
    questions = relationship(
        "Question",
        back_populates="exam",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Question.id",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Exam id={self.id} episode_id={self.episode_id} status={self.status}>"


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    exam_id = Column(Integer, ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    points = Column(Integer, nullable=False, default=1)
    is_multiple_choice = Column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (CheckConstraint("points >= 1", name="points_ge_1"),)

    exam = relationship("Exam", back_populates="questions")
    options = relationship(
        "QuestionOption",
        back_populates="question",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="QuestionOption.id",
    )


class QuestionOption(Base):
    __tablename__ = "question_options"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False, server_default=false())

    question = relationship("Question", back_populates="options")
