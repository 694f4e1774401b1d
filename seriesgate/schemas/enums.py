from __future__ import annotations

"""
Central enum definitions used across SeriesGate.

Design notes
------------
• All enums subclass `str, PyEnum` for JSON-friendly serialization.
• VALUE STRINGS are **stable** once deployed (DB enums depend on them).
"""

from enum import Enum as PyEnum


# ──────────────────────────────────────────────────────────────
# Accounts
# ──────────────────────────────────────────────────────────────
class UserRole(str, PyEnum):
    """Account role. Only SUPER_ADMIN bypasses series gating."""
    SUPER_ADMIN = "SUPER_ADMIN"
    USER_ADMIN = "USER_ADMIN"
    USER = "USER"


# ──────────────────────────────────────────────────────────────
# Catalog
# ──────────────────────────────────────────────────────────────
class EpisodeStatus(str, PyEnum):
    """Publishing lifecycle of an episode."""
    PUBLISHED = "PUBLISHED"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    PENDING_DELETION = "PENDING_DELETION"  # hidden from series listings
    PRIVATE = "PRIVATE"
    DRAFT = "DRAFT"


# ──────────────────────────────────────────────────────────────
# Exams
# ──────────────────────────────────────────────────────────────
class ExamStatus(str, PyEnum):
    """Only ACTIVE exams accept submissions."""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


__all__ = ["UserRole", "EpisodeStatus", "ExamStatus"]
