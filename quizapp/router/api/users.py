from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.model.users import User
from quizapp.router.api.logics import user_logic
from quizapp.router.dependencies import get_current_user
from quizapp.schema.auth_schema import UserStatsOut
from quizapp.schema.submission_schema import AttemptOut, AttemptsOut

router = APIRouter()


@router.get("/stats", response_model=UserStatsOut, status_code=status.HTTP_200_OK)
async def get_stats(user: User = Depends(get_current_user)):
    """Overall and per-category statistics of the current user."""
    return user_logic.get_stats_logic(user)


@router.get("/results", response_model=AttemptsOut, status_code=status.HTTP_200_OK)
async def get_results(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Every quiz attempt of the current user, newest first

    Args:
        db (Session, optional): Defaults to Depends(get_db).
        user (User, optional): Defaults to Depends(get_current_user).

    Returns:
        AttemptsOut: the attempts with the quiz they belong to
    """
    return user_logic.get_results_logic(db, user)


@router.get("/results/{attempt_id}", response_model=AttemptOut, status_code=status.HTTP_200_OK)
async def get_result(attempt_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return user_logic.get_result_logic(db, user, attempt_id)
