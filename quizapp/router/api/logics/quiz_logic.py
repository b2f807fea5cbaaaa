from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from quizapp.exceptions import (
    InternalConsistencyError,
    NotFoundError,
    PersistenceError,
    SubmissionValidationError,
)
from quizapp.log import get_logger
from quizapp.model.questions import Question
from quizapp.model.quizzes import Quiz, QuizQuestion
from quizapp.model.users import User
from quizapp.router.api.logics.category_logic import category_out, get_category_or_404
from quizapp.router.api.logics.question_logic import question_out, question_public_out
from quizapp.router.service.submission_service import SqlAlchemyStatsStore, submit_quiz
from quizapp.schema.quiz_schema import (
    CreatorOut,
    QuizCreate,
    QuizDetailOut,
    QuizFullOut,
    QuizSummaryOut,
    QuizUpdate,
)
from quizapp.schema.submission_schema import QuizSubmission, SubmissionResult

log = get_logger(__name__)


def _summary_fields(quiz: Quiz) -> dict:
    return dict(
        id=quiz.quiz_id,
        title=quiz.title,
        description=quiz.description,
        category=category_out(quiz.category),
        created_by=CreatorOut(id=quiz.creator.user_id, username=quiz.creator.username) if quiz.creator else None,
        question_count=quiz.question_count,
        time_limit=quiz.time_limit,
        is_published=quiz.is_published,
        attempts=quiz.attempts,
        average_score=quiz.average_score,
        created_at=quiz.created_at,
    )


def quiz_summary_out(quiz: Quiz) -> QuizSummaryOut:
    return QuizSummaryOut(**_summary_fields(quiz))


def _load_quiz(db: Session, quiz_id: int, published_only: bool = False) -> Quiz:
    query = (
        db.query(Quiz)
        .options(
            selectinload(Quiz.question_links)
            .selectinload(QuizQuestion.question)
            .selectinload(Question.options)
        )
        .filter(Quiz.quiz_id == quiz_id)
    )
    if published_only:
        query = query.filter(Quiz.is_published.is_(True))
    quiz = query.first()
    if not quiz:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    return quiz


def _check_owner(quiz: Quiz, user: User, action: str) -> None:
    if quiz.creator_id != user.user_id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this quiz",
        )


def _question_links(db: Session, question_ids: List[int]) -> List[QuizQuestion]:
    if not question_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A quiz must contain at least one question",
        )
    found = {
        q.question_id
        for q in db.query(Question.question_id).filter(Question.question_id.in_(set(question_ids))).all()
    }
    if any(qid not in found for qid in question_ids):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found")
    return [QuizQuestion(question_id=qid, position=i) for i, qid in enumerate(question_ids)]


def get_quizzes_logic(db: Session, category: Optional[int]) -> List[QuizSummaryOut]:
    """Published quizzes, newest first, without their questions."""
    query = db.query(Quiz).filter(Quiz.is_published.is_(True))
    if category is not None:
        query = query.filter(Quiz.category_id == category)
    quizzes = query.order_by(Quiz.created_at.desc(), Quiz.quiz_id.desc()).all()
    return [quiz_summary_out(q) for q in quizzes]


def get_quiz_logic(db: Session, quiz_id: int) -> QuizDetailOut:
    """A published quiz for taking: options are listed without the answer key."""
    quiz = _load_quiz(db, quiz_id, published_only=True)
    return QuizDetailOut(
        **_summary_fields(quiz),
        questions=[question_public_out(q) for q in quiz.questions],
    )


def get_full_quiz_logic(db: Session, quiz_id: int, user: User) -> QuizFullOut:
    quiz = _load_quiz(db, quiz_id)
    if not user.is_admin and quiz.creator_id != user.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return QuizFullOut(
        **_summary_fields(quiz),
        questions=[question_out(q) for q in quiz.questions],
    )


def create_quiz_logic(db: Session, user: User, request: QuizCreate) -> QuizSummaryOut:
    get_category_or_404(db, request.category)

    quiz = Quiz(
        title=request.title,
        description=request.description,
        category_id=request.category,
        creator_id=user.user_id,
        time_limit=request.time_limit,
        is_published=True if request.is_published is None else request.is_published,
        attempts=0,
        average_score=0.0,
        question_links=_question_links(db, request.questions),
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    log.info("user %s created quiz %s", user.user_id, quiz.quiz_id)
    return quiz_summary_out(quiz)


def update_quiz_logic(db: Session, quiz_id: int, user: User, request: QuizUpdate) -> QuizSummaryOut:
    quiz = _load_quiz(db, quiz_id)
    _check_owner(quiz, user, "update")

    if request.category is not None and request.category != quiz.category_id:
        get_category_or_404(db, request.category)
        quiz.category_id = request.category
    if request.questions is not None:
        quiz.question_links = _question_links(db, request.questions)
    if request.title is not None:
        quiz.title = request.title
    if request.description is not None:
        quiz.description = request.description
    if request.time_limit is not None:
        quiz.time_limit = request.time_limit
    if request.is_published is not None:
        quiz.is_published = request.is_published

    db.commit()
    db.refresh(quiz)
    return quiz_summary_out(quiz)


def delete_quiz_logic(db: Session, quiz_id: int, user: User) -> dict:
    quiz = _load_quiz(db, quiz_id)
    _check_owner(quiz, user, "delete")
    db.delete(quiz)
    db.commit()
    return {"message": "Quiz removed"}


def submit_quiz_logic(db: Session, user: User, quiz_id: int, submission: QuizSubmission) -> SubmissionResult:
    """Score a submission and record it. Only not-found and validation errors reach the caller in detail."""
    store = SqlAlchemyStatsStore(db)
    try:
        return submit_quiz(store, user, quiz_id, submission)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except SubmissionValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid submission data") from e
    except (InternalConsistencyError, PersistenceError, SQLAlchemyError) as e:
        log.exception("Error submitting quiz %s for user %s: %s", quiz_id, user.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error") from e
    except Exception as e:
        log.exception("Unexpected error submitting quiz %s for user %s: %s", quiz_id, user.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error") from e
