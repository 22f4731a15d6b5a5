# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Float, Text, String, Date, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.models.database import Base
from app.utils.affirmation import Affirmation, parse_affirmation


class DailyLog(Base):
    __tablename__ = "daily_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "log_date", name="uq_daily_logs_user_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    log_date = Column(Date, nullable=False)

    # Ratings, each restricted to its question's option set
    diet = Column(Float, nullable=True)
    energy_level = Column(Float, nullable=True)
    stress_fatigue = Column(Float, nullable=True)
    workout = Column(Float, nullable=True)
    water_intake = Column(Float, nullable=True)
    sleep_last_night = Column(Float, nullable=True)
    cravings = Column(Float, nullable=True)
    hunger_level = Column(Float, nullable=True)
    step_goal_reached = Column(Float, nullable=True)

    step_count = Column(Integer, nullable=True)
    good_thing = Column(Text, nullable=True)
    proud_of_yourself = Column(Text, nullable=True)  # raw answer, see .affirmation
    photo_url = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="daily_logs")

    @property
    def affirmation(self) -> Affirmation:
        return parse_affirmation(self.proud_of_yourself)

    def __repr__(self):
        return f"<DailyLog id={self.id} user={self.user_id} date={self.log_date}>"
