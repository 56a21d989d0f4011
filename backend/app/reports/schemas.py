"""Response schemas for the report endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TeacherWorkload(CamelModel):
    id: int
    teacher: str
    assignments_graded: int


class GradingOverview(CamelModel):
    total_assignments: int = 0
    graded_assignments: int = 0
    ungraded_assignments: int = 0


class GradingReportResponse(GradingOverview):
    teachers: list[TeacherWorkload] = []


class SubmissionDetail(CamelModel):
    student_name: str
    submission_url: Optional[str] = None
    status: str
    teacher_response_audio: Optional[str] = None
    teacher_response_text: Optional[str] = None


class InstallAttributionRow(CamelModel):
    agent: str
    android: int = 0
    ios: int = 0
    total: int = 0
