"""User model."""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from ..database import Base


class User(Base):
    """Teacher, student or staff account. Read-only for reporting."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Stored as plain strings; roles and genders outside the enums do occur.
    role = Column(String(50), index=True)
    gender = Column(String(20))
    first_name = Column(String(100))
    middle_name = Column(String(100))
    last_name = Column(String(100))
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    submissions_made = relationship(
        "app.models.submission.AssignmentSubmission",
        foreign_keys="AssignmentSubmission.student_id",
        back_populates="student",
    )
    submissions_reviewed = relationship(
        "app.models.submission.AssignmentSubmission",
        foreign_keys="AssignmentSubmission.teacher_id",
        back_populates="teacher",
    )

    def __repr__(self):
        return f"<User(id={self.id}, role='{self.role}')>"

    @property
    def name_parts(self) -> list:
        return [self.first_name, self.middle_name, self.last_name]
