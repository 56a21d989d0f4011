"""Shared enums for models and reports."""
import enum


class UserRole(enum.Enum):
    teacher = "teacher"
    student = "student"


class SubmissionStatus(enum.Enum):
    passed = "passed"
    failed = "failed"


class SurveyType(enum.Enum):
    agent = "agent"
    social_media = "social media"
    friend = "friend"
    other = "other"


class Platform(enum.Enum):
    android = "android"
    ios = "ios"
