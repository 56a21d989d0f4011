"""SQLAlchemy models for the teacher report service."""

from .enums import UserRole, SubmissionStatus, SurveyType, Platform
from .user import User
from .submission import AssignmentSubmission, is_graded
from .survey import SurveyRecord, platform_for_device

__all__ = [
    "User",
    "UserRole",
    "AssignmentSubmission",
    "SubmissionStatus",
    "is_graded",
    "SurveyRecord",
    "SurveyType",
    "Platform",
    "platform_for_device",
]
