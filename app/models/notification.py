# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from app.models.database import Base


class NotificationLog(Base):
    """Foreground notifications waiting for the client to pick them up."""
    __tablename__ = "notification_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)  # device-wide when null
    notification_type = Column(String, default="daily_reminder")
    title = Column(String, nullable=False)
    content = Column(Text, nullable=True)
    icon = Column(String, nullable=True)

    delivered = Column(Boolean, default=False)
    timestamp = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="notifications")
