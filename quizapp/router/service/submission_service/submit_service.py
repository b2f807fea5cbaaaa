from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from quizapp.config import settings
from quizapp.exceptions import NotFoundError, SubmissionValidationError
from quizapp.log import get_logger
from quizapp.router.service.submission_service.scorer import score_submission
from quizapp.router.service.submission_service.stats import (
    AttemptEntry,
    apply_user_attempt,
    quiz_running_average,
)
from quizapp.router.service.submission_service.stores import StatsStore
from quizapp.schema.submission_schema import QuizSubmission, SubmissionResult

log = get_logger(__name__)

READ_MODIFY_WRITE = "read_modify_write"
ATOMIC = "atomic"
SEQUENTIAL = "sequential"
TRANSACTIONAL = "transactional"


def parse_submission(submission: Union[QuizSubmission, Mapping[str, Any]]) -> QuizSubmission:
    if isinstance(submission, QuizSubmission):
        return submission
    try:
        return QuizSubmission.model_validate(submission)
    except ValidationError as e:
        raise SubmissionValidationError("Invalid submission data") from e


def record_quiz_attempt(store: StatsStore, quiz, percentage_score: float, stats_mode: str = READ_MODIFY_WRITE) -> None:
    """Fold one percentage score into the quiz's attempts/averageScore pair.

    In read_modify_write mode the new values are computed from the record
    as it was read and written back blindly, so two submissions racing on
    the same quiz lose one update. Atomic mode lets the store do the
    arithmetic against the current stored values.
    """
    if stats_mode == ATOMIC:
        store.increment_quiz_stats(quiz, percentage_score)
        return
    new_attempts, new_average = quiz_running_average(quiz.attempts or 0, quiz.average_score or 0.0, percentage_score)
    store.commit_quiz_stats(quiz, new_attempts, new_average)


def record_user_attempt(store: StatsStore, user, entry: AttemptEntry) -> None:
    apply_user_attempt(user, entry)
    store.commit_user_stats(user)


def submit_quiz(
    store: StatsStore,
    user,
    quiz_id: int,
    submission: Union[QuizSubmission, Mapping[str, Any]],
    stats_mode: Optional[str] = None,
    commit_mode: Optional[str] = None,
) -> SubmissionResult:
    """Score a submission and record it against the quiz and the user.

    Steps run in a fixed order: fetch quiz, score, persist quiz stats,
    persist user stats. In sequential mode the two writes are independent
    commits, so a failure in the user write leaves the quiz stats already
    updated. Transactional mode commits both or neither.

    Args:
        store (StatsStore): Where quizzes are read and statistics written.
        user (User): The submitting user.
        quiz_id (int): The quiz being answered.
        submission (QuizSubmission | Mapping): Answers and elapsed time.
        stats_mode (str, optional): ``read_modify_write`` or ``atomic``. Defaults to settings.QUIZ_STATS_UPDATE.
        commit_mode (str, optional): ``sequential`` or ``transactional``. Defaults to settings.SUBMISSION_COMMIT.

    Raises:
        SubmissionValidationError: The payload is malformed. Nothing is written.
        NotFoundError: The quiz does not exist. Nothing is written.
        InternalConsistencyError: The stored quiz cannot be scored. Nothing is written.
        PersistenceError: A statistics write failed.

    Returns:
        SubmissionResult: Score, percentage and the per-question review.
    """
    submission = parse_submission(submission)
    stats_mode = stats_mode or settings.QUIZ_STATS_UPDATE
    commit_mode = commit_mode or settings.SUBMISSION_COMMIT

    quiz = store.get_quiz_with_answer_key(quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz not found")

    outcome = score_submission(quiz.questions, submission.answers)
    entry = AttemptEntry(
        quiz_id=quiz.quiz_id,
        category_id=quiz.category_id,
        score=outcome.percentage_score,
        total_questions=outcome.total_questions,
        time_taken=submission.time_taken,
    )

    if commit_mode == TRANSACTIONAL:
        with store.transaction():
            record_quiz_attempt(store, quiz, outcome.percentage_score, stats_mode)
            record_user_attempt(store, user, entry)
    else:
        record_quiz_attempt(store, quiz, outcome.percentage_score, stats_mode)
        record_user_attempt(store, user, entry)

    log.info(
        "user %s scored %d/%d on quiz %s",
        user.user_id, outcome.correct_count, outcome.total_questions, quiz.quiz_id,
    )
    return SubmissionResult(
        score=outcome.correct_count,
        total_questions=outcome.total_questions,
        percentage_score=outcome.percentage_score,
        time_taken=submission.time_taken,
        results=outcome.verdicts,
    )
