"""Install survey model."""

import re
import uuid

from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.sql import func

from ..database import Base
from .enums import Platform

IOS_DEVICE_ID = re.compile(r"^[0-9A-Fa-f]{8}-")


def platform_for_device(device_id) -> Platform:
    """iOS identifiers start with 8 hex characters and a hyphen; anything else is Android."""
    if device_id and IOS_DEVICE_ID.match(device_id):
        return Platform.ios
    return Platform.android


class SurveyRecord(Base):
    """Answer to the "how did you hear about us" prompt shown after install."""
    __tablename__ = "install_surveys"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String(50), nullable=False)
    agent_id = Column(Integer, nullable=True)
    device_id = Column(String(255))
    created_at = Column(DateTime, server_default=func.now(), index=True)

    def __repr__(self):
        return f"<SurveyRecord(id={self.id}, type='{self.type}')>"

    @property
    def platform(self) -> Platform:
        return platform_for_device(self.device_id)
