from datetime import datetime
from typing import Any, Dict, Tuple

from pydantic import BaseModel

from quizapp.model.attempts import Attempt
from quizapp.model.category_performance import CategoryPerformance


class AttemptEntry(BaseModel):
    quiz_id: int
    category_id: int
    score: float  # percentage
    total_questions: int
    time_taken: float


def quiz_running_average(attempts: int, average_score: float, percentage_score: float) -> Tuple[int, float]:
    """Incremental mean over every score ever submitted to a quiz. Cannot be un-applied."""
    new_attempts = attempts + 1
    new_average = (average_score * attempts + percentage_score) / new_attempts
    return new_attempts, new_average


def apply_user_attempt(user, entry: AttemptEntry) -> Attempt:
    """Fold one scored attempt into the user's in-memory statistics.

    Unlike the quiz side, the overall average is recomputed from the stored
    attempt history. Category averages use the incremental mean. Nothing is
    persisted here; the caller commits the whole record at once.

    Args:
        user (User): The submitting user.
        entry (AttemptEntry): The scored attempt.

    Returns:
        Attempt: The history entry appended to ``user.attempts``.
    """
    prior_attempts = list(user.attempts)
    total_scores = sum(a.score for a in prior_attempts) + entry.score
    user.average_score = total_scores / (len(prior_attempts) + 1)

    performance = user.category_performance.get(entry.category_id)
    if performance is None:
        user.category_performance[entry.category_id] = CategoryPerformance(
            category_id=entry.category_id,
            quizzes_taken=1,
            average_score=entry.score,
        )
    else:
        _, performance.average_score = quiz_running_average(
            performance.quizzes_taken, performance.average_score, entry.score
        )
        performance.quizzes_taken += 1

    attempt = Attempt(
        quiz_id=entry.quiz_id,
        score=entry.score,
        total_questions=entry.total_questions,
        time_taken=entry.time_taken,
        attempted_at=datetime.now(),
    )
    user.attempts.append(attempt)

    user.total_quizzes_taken = (user.total_quizzes_taken or 0) + 1
    return attempt


def user_stats_block(user) -> Dict[str, Any]:
    """Plain snapshot of everything a submission changes on a user."""
    return {
        "total_quizzes_taken": user.total_quizzes_taken or 0,
        "average_score": user.average_score or 0.0,
        "category_performance": {
            category_id: {
                "quizzes_taken": p.quizzes_taken,
                "average_score": p.average_score,
            }
            for category_id, p in user.category_performance.items()
        },
        "attempts": [
            {
                "quiz_id": a.quiz_id,
                "score": a.score,
                "total_questions": a.total_questions,
                "time_taken": a.time_taken,
                "attempted_at": a.attempted_at,
            }
            for a in user.attempts
        ],
    }
