from __future__ import annotations

"""
🔒 SeriesGate — Episode Access Evaluator
=======================================

Computes, for every episode of a series, whether it is locked for a viewer.

Rules (evaluated per episode, left to right)
--------------------------------------------
1. A SUPER_ADMIN, or the author of *that* episode, sees it unlocked.
2. An episode with `is_locked_by_default == False` is unlocked.
3. The first episode in the list is locked.
4. Otherwise look at the literal list predecessor:
   - it does not require an exam to unlock → locked;
   - it requires one but has no exam linked → locked;
   - else unlocked iff its exam id is in `passed_exam_ids`.

The evaluator is a pure function: no I/O, no logging, no mutation of its
inputs. Episodes are duck-typed so ORM rows and plain dataclasses both work.
"""

from dataclasses import dataclass
from typing import AbstractSet, Any, Generic, List, Optional, Protocol, Sequence, TypeVar, Union

from seriesgate.schemas.enums import UserRole


# ─────────────────────────────────────────────────────────────
# 👤 Viewer (tagged variant)
# ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Anonymous:
    """No authenticated identity."""

    kind: str = "anonymous"


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    role: UserRole = UserRole.USER
    kind: str = "user"


Viewer = Union[Anonymous, AuthenticatedUser]

ANONYMOUS = Anonymous()


# ─────────────────────────────────────────────────────────────
# 📦 Input / output shapes
# ─────────────────────────────────────────────────────────────
class ExamLike(Protocol):
    id: Any


class GatedEpisode(Protocol):
    author_id: Optional[str]
    is_locked_by_default: bool
    requires_exam_to_unlock: bool
    exam: Optional[ExamLike]


E = TypeVar("E", bound=GatedEpisode)


@dataclass(frozen=True)
class EpisodeLock(Generic[E]):
    episode: E
    is_locked: bool


# ─────────────────────────────────────────────────────────────
# 🧮 Evaluator
# ─────────────────────────────────────────────────────────────
def bypasses_gating(viewer: Viewer, episode: GatedEpisode) -> bool:
    """True when the viewer is a super-admin or this episode's author."""
    if not isinstance(viewer, AuthenticatedUser):
        return False
    if viewer.role == UserRole.SUPER_ADMIN:
        return True
    return episode.author_id is not None and str(episode.author_id) == str(viewer.id)


def _is_locked(episodes: Sequence[GatedEpisode], index: int, passed_exam_ids: AbstractSet[Any]) -> bool:
    episode = episodes[index]
    if not episode.is_locked_by_default:
        return False
    if index == 0:
        return True

    previous = episodes[index - 1]
    if not previous.requires_exam_to_unlock:
        return True
    if previous.exam is None:
        # flagged to require an exam but none linked: fail closed
        return True
    return previous.exam.id not in passed_exam_ids


def compute_episode_locks(
    episodes: Sequence[E],
    viewer: Viewer,
    passed_exam_ids: AbstractSet[Any],
) -> List[EpisodeLock[E]]:
    """Return one `EpisodeLock` per episode, in input order.

    `episodes` must already be sorted ascending by `order_in_series`; the
    evaluator does not validate ordering.
    """
    locks: List[EpisodeLock[E]] = []
    for index, episode in enumerate(episodes):
        if bypasses_gating(viewer, episode):
            locked = False
        else:
            locked = _is_locked(episodes, index, passed_exam_ids)
        locks.append(EpisodeLock(episode=episode, is_locked=locked))
    return locks


__all__ = [
    "Anonymous",
    "AuthenticatedUser",
    "Viewer",
    "ANONYMOUS",
    "EpisodeLock",
    "GatedEpisode",
    "bypasses_gating",
    "compute_episode_locks",
]
