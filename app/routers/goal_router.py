# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.models.database import get_db
from app.schemas.goal_schemas import GoalRead, GoalRequest
from app.services.goal_service import GoalRepository
from app.utils.auth_utils import current_user_id, require_token

router = APIRouter(prefix="/goals", tags=["Goals"])


def get_goal_repository(db: Session = Depends(get_db), user_data: dict = Depends(require_token)) -> GoalRepository:
    return GoalRepository(db, current_user_id(user_data))


@router.get("", response_model=List[GoalRead])
def list_goals(repo: GoalRepository = Depends(get_goal_repository)):
    return repo.list()


@router.post("", response_model=GoalRead, status_code=201)
def create_goal(payload: GoalRequest, repo: GoalRepository = Depends(get_goal_repository)):
    return repo.create(payload)


@router.put("/{goal_id}", response_model=GoalRead)
def update_goal(goal_id: int, payload: GoalRequest, repo: GoalRepository = Depends(get_goal_repository)):
    goal = repo.update(goal_id, payload)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.delete("/{goal_id}")
def delete_goal(goal_id: int, repo: GoalRepository = Depends(get_goal_repository)):
    if not repo.delete(goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"status": "deleted", "id": goal_id}
