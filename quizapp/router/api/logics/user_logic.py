from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quizapp.model.attempts import Attempt
from quizapp.model.users import User
from quizapp.router.api.logics.auth_logic import user_stats_out
from quizapp.router.api.logics.category_logic import category_out
from quizapp.schema.auth_schema import UserStatsOut
from quizapp.schema.submission_schema import AttemptOut, AttemptQuizOut, AttemptsOut


def attempt_out(a: Attempt) -> AttemptOut:
    quiz = a.quiz
    return AttemptOut(
        id=a.attempt_id,
        quiz_id=a.quiz_id,
        score=a.score,
        total_questions=a.total_questions,
        time_taken=a.time_taken,
        attempted_at=a.attempted_at,
        quiz=AttemptQuizOut(id=quiz.quiz_id, title=quiz.title, category=category_out(quiz.category)) if quiz else None,
    )


def get_stats_logic(user: User) -> UserStatsOut:
    return user_stats_out(user)


def get_results_logic(db: Session, user: User) -> AttemptsOut:
    """Attempt history of the current user, newest first."""
    attempts = (
        db.query(Attempt)
        .filter(Attempt.user_id == user.user_id)
        .order_by(Attempt.attempted_at.desc(), Attempt.attempt_id.desc())
        .all()
    )
    return AttemptsOut(results=[attempt_out(a) for a in attempts])


def get_result_logic(db: Session, user: User, attempt_id: int) -> AttemptOut:
    attempt = db.query(Attempt).filter(Attempt.attempt_id == attempt_id).first()
    if not attempt:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Result not found")
    if attempt.user_id != user.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized access to result")
    return attempt_out(attempt)
