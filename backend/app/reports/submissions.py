"""Graded submissions of a single teacher."""

import logging

from sqlalchemy.orm import Session, aliased

from ..models import AssignmentSubmission, SubmissionStatus, User
from .dates import DateRange
from .names import display_name
from .schemas import SubmissionDetail

logger = logging.getLogger(__name__)

REVIEWED_STATUSES = (SubmissionStatus.passed.value, SubmissionStatus.failed.value)


class SubmissionDetailReport:
    def __init__(self, db: Session):
        self.db = db

    def build(self, date_range: DateRange, teacher_name: str) -> list[SubmissionDetail]:
        """Passed or failed submissions reviewed by ``teacher_name``, oldest first.

        The teacher is matched on the exact normalized display name.
        """
        student = aliased(User)
        teacher = aliased(User)
        rows = (
            self.db.query(AssignmentSubmission, student, teacher)
            .join(student, AssignmentSubmission.student_id == student.id)
            .join(teacher, AssignmentSubmission.teacher_id == teacher.id)
            .filter(
                AssignmentSubmission.created_at >= date_range.start,
                AssignmentSubmission.created_at <= date_range.end,
                AssignmentSubmission.status.in_(REVIEWED_STATUSES),
            )
            .order_by(AssignmentSubmission.created_at, AssignmentSubmission.id)
            .all()
        )

        details = [
            self._detail(submission, student_row)
            for submission, student_row, teacher_row in rows
            if display_name(teacher_row) == teacher_name
        ]
        logger.info(f"Found {len(details)} reviewed submissions for teacher '{teacher_name}'")
        return details

    @staticmethod
    def _detail(submission: AssignmentSubmission, student: User) -> SubmissionDetail:
        # Audio feedback supersedes text: text is only reported when no file exists.
        return SubmissionDetail(
            student_name=display_name(student),
            submission_url=submission.submission_url,
            status=submission.status,
            teacher_response_audio=submission.feedback_audio_url,
            teacher_response_text=None if submission.feedback_files else submission.feedback,
        )
