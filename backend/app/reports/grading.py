"""Assignment grading statistics and per-teacher workload."""

import enum
import logging
from collections import Counter
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, aliased

from ..models import AssignmentSubmission, User, UserRole, is_graded
from .dates import DateRange
from .names import UNNAMED_TEACHER, display_name, normalize_name
from .schemas import GradingOverview, GradingReportResponse, TeacherWorkload

logger = logging.getLogger(__name__)

ALL_GENDERS = "all"


class ActivityField(enum.Enum):
    """Which submission timestamp decides whether it falls in the range."""
    created_at = "createdAt"
    updated_at = "updatedAt"

    @property
    def column(self):
        return getattr(AssignmentSubmission, self.name)


def gender_filter(gender: str) -> Optional[str]:
    """Lower-cased gender to match on, or None when every gender is wanted."""
    value = gender.strip().lower()
    return None if value == ALL_GENDERS else value


class AssignmentGradingReport:
    """Counts graded and ungraded submissions in a date range.

    ``allow_list`` restricts the per-teacher table to the given display
    names (compared case-insensitively after normalization). An empty or
    missing allow-list keeps every teacher.
    """

    def __init__(self, db: Session, allow_list: Optional[Iterable[str]] = None):
        self.db = db
        self.allow_list = {
            normalize_name([name]).lower() for name in (allow_list or []) if normalize_name([name])
        }

    def build(
        self,
        date_range: DateRange,
        gender: str = ALL_GENDERS,
        activity_field: ActivityField = ActivityField.created_at,
    ) -> GradingReportResponse:
        overview = self.overview(date_range, gender, activity_field)
        teachers = self.teacher_workload(date_range, gender, activity_field)
        logger.info(
            f"Grading report {date_range.start:%Y-%m-%d}..{date_range.end:%Y-%m-%d} "
            f"gender={gender}: {overview.total_assignments} assignments, {len(teachers)} teachers"
        )
        return GradingReportResponse(**overview.model_dump(), teachers=teachers)

    def _submissions_in_range(self, date_range: DateRange, gender: str, activity_field: ActivityField, *columns):
        student = aliased(User)
        column = activity_field.column
        query = (
            self.db.query(*columns)
            .join(student, AssignmentSubmission.student_id == student.id)
            .filter(column >= date_range.start, column <= date_range.end)
        )
        wanted_gender = gender_filter(gender)
        if wanted_gender is not None:
            query = query.filter(func.lower(student.gender) == wanted_gender)
        return query

    def overview(
        self,
        date_range: DateRange,
        gender: str = ALL_GENDERS,
        activity_field: ActivityField = ActivityField.created_at,
    ) -> GradingOverview:
        rows = self._submissions_in_range(
            date_range, gender, activity_field,
            AssignmentSubmission.feedback_files, AssignmentSubmission.feedback,
        ).all()
        total = len(rows)
        graded = sum(1 for files, text in rows if is_graded(files, text))
        return GradingOverview(
            total_assignments=total,
            graded_assignments=graded,
            ungraded_assignments=total - graded,
        )

    def _teachers(self, gender: str) -> list[User]:
        query = self.db.query(User).filter(User.role == UserRole.teacher.value)
        wanted_gender = gender_filter(gender)
        if wanted_gender is not None:
            query = query.filter(func.lower(User.gender) == wanted_gender)
        teachers = query.order_by(User.created_at, User.id).all()
        if self.allow_list:
            teachers = [t for t in teachers if display_name(t).lower() in self.allow_list]
        return teachers

    def teacher_workload(
        self,
        date_range: DateRange,
        gender: str = ALL_GENDERS,
        activity_field: ActivityField = ActivityField.created_at,
    ) -> list[TeacherWorkload]:
        teachers = self._teachers(gender)
        if not teachers:
            return []

        rows = (
            self._submissions_in_range(
                date_range, gender, activity_field,
                AssignmentSubmission.teacher_id,
                AssignmentSubmission.feedback_files,
                AssignmentSubmission.feedback,
            )
            .filter(AssignmentSubmission.teacher_id.in_([t.id for t in teachers]))
            .all()
        )
        graded_counts = Counter(teacher_id for teacher_id, files, text in rows if is_graded(files, text))

        workload = [(display_name(t, UNNAMED_TEACHER), graded_counts.get(t.id, 0)) for t in teachers]
        # sorted() is stable, so ties keep the teacher query order
        workload = sorted(workload, key=lambda item: item[1], reverse=True)
        return [
            TeacherWorkload(id=index, teacher=name, assignments_graded=count)
            for index, (name, count) in enumerate(workload, start=1)
        ]
