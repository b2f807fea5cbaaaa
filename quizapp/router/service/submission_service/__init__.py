from quizapp.router.service.submission_service.scorer import ScoreOutcome, score_submission
from quizapp.router.service.submission_service.stats import AttemptEntry, apply_user_attempt, quiz_running_average
from quizapp.router.service.submission_service.stores import (
    StatsStore,
    SqlAlchemyStatsStore,
    InMemoryStatsStore,
    QuizRecord,
    AnswerKeyQuestion,
    AnswerKeyOption,
)
from quizapp.router.service.submission_service.submit_service import (
    submit_quiz,
    record_quiz_attempt,
    record_user_attempt,
    parse_submission,
)

__all__ = [
    "ScoreOutcome",
    "score_submission",
    "AttemptEntry",
    "apply_user_attempt",
    "quiz_running_average",
    "StatsStore",
    "SqlAlchemyStatsStore",
    "InMemoryStatsStore",
    "QuizRecord",
    "AnswerKeyQuestion",
    "AnswerKeyOption",
    "submit_quiz",
    "record_quiz_attempt",
    "record_user_attempt",
    "parse_submission",
]
