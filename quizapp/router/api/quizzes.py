from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.model.users import User
from quizapp.router.api.logics import quiz_logic
from quizapp.router.dependencies import get_current_user
from quizapp.schema.quiz_schema import QuizCreate, QuizDetailOut, QuizFullOut, QuizSummaryOut, QuizUpdate
from quizapp.schema.submission_schema import QuizSubmission, SubmissionResult

router = APIRouter()


@router.get("", response_model=List[QuizSummaryOut], status_code=status.HTTP_200_OK)
async def get_quizzes(category: Optional[int] = Query(None), db: Session = Depends(get_db)):
    """Published quizzes, newest first."""
    return quiz_logic.get_quizzes_logic(db, category)


@router.get("/{quiz_id}", response_model=QuizDetailOut, status_code=status.HTTP_200_OK)
async def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    """A published quiz with its questions, without answers."""
    return quiz_logic.get_quiz_logic(db, quiz_id)


@router.get("/{quiz_id}/full", response_model=QuizFullOut, status_code=status.HTTP_200_OK)
async def get_full_quiz(quiz_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """A quiz with its answer key. Admins and the quiz creator only."""
    return quiz_logic.get_full_quiz_logic(db, quiz_id, user)


@router.post("", response_model=QuizSummaryOut, status_code=status.HTTP_201_CREATED)
async def create_quiz(request: QuizCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Create a quiz owned by the current user

    Args:
        request (QuizCreate): title, description, category and the ordered question ids

    Raises:
        HTTPException: 404 for an unknown category or question, 400 for an empty question list

    Returns:
        QuizSummaryOut: the created quiz
    """
    return quiz_logic.create_quiz_logic(db, user, request)


@router.put("/{quiz_id}", response_model=QuizSummaryOut, status_code=status.HTTP_200_OK)
async def update_quiz(quiz_id: int, request: QuizUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return quiz_logic.update_quiz_logic(db, quiz_id, user, request)


@router.delete("/{quiz_id}", response_model=dict, status_code=status.HTTP_200_OK)
async def delete_quiz(quiz_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return quiz_logic.delete_quiz_logic(db, quiz_id, user)


@router.post("/{quiz_id}/submit", response_model=SubmissionResult, status_code=status.HTTP_200_OK)
async def submit_quiz(quiz_id: int, submission: QuizSubmission, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Submit answers to a quiz

    Scores the answers, then updates the quiz's attempt statistics and the
    user's statistics and history.

    Args:
        quiz_id (int): the quiz being answered
        submission (QuizSubmission): answers as questionId/selectedOption pairs and timeTaken
        db (Session): Database session
        user (User): the submitting user

    Raises:
        HTTPException: 404 when the quiz does not exist, 500 on any internal failure

    Returns:
        SubmissionResult: score, totalQuestions, percentageScore, timeTaken and per-question results
    """
    return quiz_logic.submit_quiz_logic(db, user, quiz_id, submission)
