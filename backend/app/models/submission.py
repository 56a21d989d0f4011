"""Assignment submission model."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from ..database import Base


def is_graded(feedback_files, feedback) -> bool:
    """Graded once the teacher left a feedback file or non-empty feedback text."""
    if feedback_files:
        return True
    return feedback is not None and feedback != ""


class AssignmentSubmission(Base):
    """A student's submission and the teacher's grading artifacts."""
    __tablename__ = "assignment_submissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey("users.id"), index=True)
    teacher_id = Column(String(36), ForeignKey("users.id"), index=True)
    status = Column(String(20), index=True)
    attachments = Column(JSON, default=[])
    feedback_files = Column(JSON, default=[])
    feedback = Column(Text, nullable=True)
    # Naive UTC timestamps
    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), index=True)

    # Relationships
    student = relationship(
        "app.models.user.User", foreign_keys=[student_id], back_populates="submissions_made"
    )
    teacher = relationship(
        "app.models.user.User", foreign_keys=[teacher_id], back_populates="submissions_reviewed"
    )

    def __repr__(self):
        return f"<AssignmentSubmission(id={self.id}, status='{self.status}')>"

    @property
    def submission_url(self):
        """URL of the first attachment, if any."""
        if not self.attachments:
            return None
        return self.attachments[0].get("url")

    @property
    def feedback_audio_url(self):
        """URL of the most recent feedback file, if any."""
        if not self.feedback_files:
            return None
        return self.feedback_files[-1].get("url")
