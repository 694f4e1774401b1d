# seriesgate/core/exceptions.py
from __future__ import annotations

"""
SeriesGate — Application Exceptions
===================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
lets us attach structured metadata and integrate cleanly with the
problem+json shape from `seriesgate.core.exception_handlers`.

Key ideas
---------
- One base `AppException` that carries `code`, `request_id`, `user_id`, `details`, `extra`.
- Domain exceptions inherit from it and set sane defaults.
- Zero breaking changes for callers already catching `HTTPException`.

Usage
-----
    raise NotFoundException(resource="Series", resource_id=42)
    raise EpisodeLockedException(episode_id=7)
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "NotFoundException",
    "EpisodeLockedException",
    "InvalidTokenException",
    "ExamUnavailableException",
    "AttemptsExhaustedException",
    "SubmissionAccessDeniedException",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code (e.g., 401/403/404/409).
    message : str
        Human-readable error message (serialized as `detail` as well).
    code : int
        Optional internal/typed error code. Defaults to `status_code`.
    request_id : str | None
        Optional request correlation id.
    user_id : str | None
        User id for auditing/context.
    details : dict | list | str | None
        Machine-readable details (ids, limits, windows).
    extra : dict | None
        Additional non-sensitive metadata to surface to clients.
    headers : dict | None
        Optional headers (e.g., `{"WWW-Authenticate": "Bearer"}`).
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        request_id: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code: int = int(code or status_code)
        self.message: str = message
        self.request_id: Optional[str] = request_id
        self.user_id: Optional[str] = user_id
        self.details: Optional[Any] = details
        self.extra: Dict[str, Any] = extra or {}

    def to_problem(self, *, fallback_request_id: Optional[str] = None) -> Dict[str, Any]:
        """Return the extension members merged into the problem+json body."""
        body: Dict[str, Any] = {
            "code": self.code,
            "request_id": self.request_id or fallback_request_id or "N/A",
        }
        if self.details is not None:
            body["details"] = self.details
        extra_sanitized = dict(self.extra) if self.extra else {}
        for k in ("token", "authorization", "password", "secret"):
            extra_sanitized.pop(k, None)
        body.update(extra_sanitized)
        return body


# ──────────────────────────────────────────────────────────────
# 🔎 Lookup
# ──────────────────────────────────────────────────────────────
class NotFoundException(AppException):
    """Raised when a series, episode or exam does not exist."""

    def __init__(self, *, resource: str, resource_id: Any, request_id: Optional[str] = None) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            message=f"{resource} not found",
            request_id=request_id,
            details={"resource": resource, "id": resource_id},
        )


# ──────────────────────────────────────────────────────────────
# 🔒 Series gating
# ──────────────────────────────────────────────────────────────
class EpisodeLockedException(AppException):
    """Raised when a viewer requests an episode that is locked for them."""

    def __init__(self, *, episode_id: int, user_id: Optional[str] = None) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            message="Episode is locked",
            user_id=user_id,
            details={"episode_id": episode_id},
        )


# ──────────────────────────────────────────────────────────────
# 🔑 Auth/Token exceptions
# ──────────────────────────────────────────────────────────────
class InvalidTokenException(AppException):
    """Raised for invalid or expired tokens (401 by default)."""

    def __init__(
        self,
        *,
        detail: str = "Invalid or expired token",
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        headers: Optional[Dict[str, str]] = None,
        user_id: Optional[str] = None,
    ) -> None:
        headers = headers or {"WWW-Authenticate": "Bearer"}
        super().__init__(
            status_code=status_code,
            message=detail,
            user_id=user_id,
            headers=headers,
        )


# ──────────────────────────────────────────────────────────────
# 📝 Exam taking
# ──────────────────────────────────────────────────────────────
class ExamUnavailableException(AppException):
    """Raised when an exam is not active or outside its start/end window."""

    def __init__(self, *, exam_id: int, reason: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            message=reason,
            details={"exam_id": exam_id},
        )


class AttemptsExhaustedException(AppException):
    """Raised when a user has used every attempt an exam allows."""

    def __init__(self, *, exam_id: int, attempts_allowed: int, user_id: Optional[str] = None) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            message=f"You have reached the maximum number of attempts ({attempts_allowed}).",
            user_id=user_id,
            details={"exam_id": exam_id, "attempts_allowed": attempts_allowed},
        )


class SubmissionAccessDeniedException(AppException):
    """Raised when a result is requested by someone other than its owner."""

    def __init__(self, *, submission_id: int, user_id: Optional[str] = None) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            message="You are not authorized to view these results.",
            user_id=user_id,
            details={"submission_id": submission_id},
        )
