# tests/utils/factory.py

from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from seriesgate.db.models import Episode, Exam, ExamSubmission, Question, QuestionOption, Series, User
from seriesgate.schemas.enums import EpisodeStatus, ExamStatus, UserRole


async def create_user(
    session: AsyncSession,
    *,
    email: Optional[str] = None,
    role: UserRole = UserRole.USER,
    is_active: bool = True,
    name: str = "Test User",
) -> User:
    user = User(
        id=str(uuid4()),
        email=email or f"user-{uuid4().hex[:10]}@example.com",
        name=name,
        role=role,
        is_active=is_active,
    )
    session.add(user)
    await session.flush()
    return user


async def create_series(session: AsyncSession, *, title: Optional[str] = None, author: Optional[User] = None) -> Series:
    series = Series(title=title or f"Series {uuid4().hex[:8]}", author_id=author.id if author else None)
    session.add(series)
    await session.flush()
    return series


async def create_episode(
    session: AsyncSession,
    series: Series,
    *,
    order: int,
    locked: bool = True,
    requires_exam: bool = False,
    author: Optional[User] = None,
    status: EpisodeStatus = EpisodeStatus.PUBLISHED,
    title: Optional[str] = None,
) -> Episode:
    episode = Episode(
        series_id=series.id,
        author_id=author.id if author else series.author_id,
        title=title or f"Episode {order}",
        content=f"Body of episode {order}",
        order_in_series=order,
        status=status,
        is_locked_by_default=locked,
        requires_exam_to_unlock=requires_exam,
    )
    session.add(episode)
    await session.flush()
    return episode


async def create_exam(
    session: AsyncSession,
    *,
    episode: Optional[Episode] = None,
    questions: Sequence[Tuple[int, bool, Iterable[bool]]] = ((100, False, (True, False)),),
    status: ExamStatus = ExamStatus.ACTIVE,
    attempts_allowed: int = 0,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Exam:
    """Create an exam; each question is `(points, is_multiple_choice, option correctness flags)`."""
    exam = Exam(
        episode_id=episode.id if episode else None,
        title="Checkpoint",
        status=status,
        attempts_allowed=attempts_allowed,
        start_date=start_date,
        end_date=end_date,
    )
    for index, (points, multiple, flags) in enumerate(questions, start=1):
        question = Question(text=f"Question {index}", points=points, is_multiple_choice=multiple)
        question.options = [
            QuestionOption(text=f"Option {index}.{n}", is_correct=flag) for n, flag in enumerate(flags, start=1)
        ]
        exam.questions.append(question)
    session.add(exam)
    await session.flush()
    return exam


async def create_submission(session: AsyncSession, *, user: User, exam: Exam, score: int) -> ExamSubmission:
    submission = ExamSubmission(user_id=user.id, exam_id=exam.id, score=score)
    session.add(submission)
    await session.flush()
    return submission
