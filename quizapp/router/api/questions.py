from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.model.users import User
from quizapp.router.api.logics import question_logic
from quizapp.router.dependencies import get_current_admin, get_current_user
from quizapp.schema.question_schema import QuestionCreate, QuestionOut, QuestionPublicOut, QuestionUpdate

router = APIRouter()


@router.get("", response_model=List[QuestionOut], status_code=status.HTTP_200_OK)
async def get_questions(
    category: Optional[int] = Query(None),
    difficulty: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """All questions with their answer key, optionally filtered. Admin only."""
    return question_logic.get_questions_logic(db, category, difficulty)


@router.get("/category/{category_id}", response_model=List[QuestionPublicOut], status_code=status.HTTP_200_OK)
async def get_questions_by_category(category_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Questions of a category without correct answers."""
    return question_logic.get_questions_by_category_logic(db, category_id)


@router.get("/{question_id}", response_model=QuestionOut, status_code=status.HTTP_200_OK)
async def get_question(question_id: int, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    return question_logic.get_question_logic(db, question_id)


@router.post("", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
async def create_question(request: QuestionCreate, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    """Create a question. Admin only.

    Args:
        request (QuestionCreate): text, exactly 4 options with one correct, category, difficulty

    Raises:
        HTTPException: 404 for an unknown category, 400 for a malformed option list
    """
    return question_logic.create_question_logic(db, request)


@router.put("/{question_id}", response_model=QuestionOut, status_code=status.HTTP_200_OK)
async def update_question(question_id: int, request: QuestionUpdate, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    return question_logic.update_question_logic(db, question_id, request)


@router.delete("/{question_id}", response_model=dict, status_code=status.HTTP_200_OK)
async def delete_question(question_id: int, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    return question_logic.delete_question_logic(db, question_id)
