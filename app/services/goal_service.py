# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.goal import Goal
from app.schemas.goal_schemas import GoalRequest
from app.services.daily_log_repository import db_errors
from app.utils.errors import NotAuthenticated

logger = logging.getLogger(__name__)


class GoalRepository:
    def __init__(self, db: Session, user_id: Optional[int]):
        if user_id is None:
            raise NotAuthenticated("Not authenticated")
        self.db = db
        self.user_id = user_id

    def _query(self):
        return self.db.query(Goal).filter(Goal.user_id == self.user_id)

    def list(self) -> List[Goal]:
        with db_errors(self.db, "load goals"):
            return self._query().order_by(Goal.created_at.asc(), Goal.id.asc()).all()

    def create(self, payload: GoalRequest) -> Goal:
        with db_errors(self.db, "create goal"):
            goal = Goal(user_id=self.user_id, **payload.model_dump())
            self.db.add(goal)
            self.db.commit()
            self.db.refresh(goal)

        logger.info(f"🎯 Goal {goal.id} created for user {self.user_id}")
        return goal

    def update(self, goal_id: int, payload: GoalRequest) -> Optional[Goal]:
        with db_errors(self.db, "update goal"):
            goal = self._query().filter(Goal.id == goal_id).first()
            if not goal:
                return None
            for key, value in payload.model_dump().items():
                setattr(goal, key, value)
            goal.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(goal)
        return goal

    def delete(self, goal_id: int) -> bool:
        with db_errors(self.db, "delete goal"):
            count = self._query().filter(Goal.id == goal_id).delete(synchronize_session=False)
            self.db.commit()
        return bool(count)
