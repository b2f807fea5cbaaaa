import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from quizapp.exceptions import PersistenceError
from quizapp.log import get_logger
from quizapp.model.questions import Question
from quizapp.model.quizzes import Quiz, QuizQuestion
from quizapp.router.service.submission_service.stats import user_stats_block

log = get_logger(__name__)


class StatsStore:
    """Persistence boundary of the submission engine.

    ``commit_quiz_stats`` is a blind write of values computed by the caller
    (last write wins). ``increment_quiz_stats`` folds a score in on the store
    side, so concurrent submissions cannot overwrite each other.
    """

    def get_quiz_with_answer_key(self, quiz_id: int):
        raise NotImplementedError

    def commit_quiz_stats(self, quiz, new_attempts: int, new_average: float) -> None:
        raise NotImplementedError

    def increment_quiz_stats(self, quiz, percentage_score: float) -> None:
        raise NotImplementedError

    def commit_user_stats(self, user) -> None:
        raise NotImplementedError

    def transaction(self):
        """Context manager grouping every commit made inside the block into one."""
        raise NotImplementedError


class SqlAlchemyStatsStore(StatsStore):
    def __init__(self, db: Session):
        self.db = db
        self._in_transaction = False

    def get_quiz_with_answer_key(self, quiz_id: int) -> Optional[Quiz]:
        return (
            self.db.query(Quiz)
            .options(
                selectinload(Quiz.question_links)
                .selectinload(QuizQuestion.question)
                .selectinload(Question.options)
            )
            .filter(Quiz.quiz_id == quiz_id)
            .first()
        )

    def commit_quiz_stats(self, quiz: Quiz, new_attempts: int, new_average: float) -> None:
        quiz.attempts = new_attempts
        quiz.average_score = new_average
        self._commit("quiz", quiz.quiz_id)

    def increment_quiz_stats(self, quiz: Quiz, percentage_score: float) -> None:
        # every right-hand side reads the pre-update row
        stmt = (
            update(Quiz)
            .where(Quiz.quiz_id == quiz.quiz_id)
            .values(
                attempts=Quiz.attempts + 1,
                average_score=(Quiz.average_score * Quiz.attempts + percentage_score) / (Quiz.attempts + 1),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to update stats of quiz {quiz.quiz_id}") from e
        self._commit("quiz", quiz.quiz_id)
        self.db.refresh(quiz)

    def commit_user_stats(self, user) -> None:
        self.db.add(user)
        self._commit("user", user.user_id)

    @contextmanager
    def transaction(self):
        self._in_transaction = True
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to commit submission") from e
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._in_transaction = False

    def _commit(self, kind: str, record_id) -> None:
        try:
            if self._in_transaction:
                self.db.flush()
            else:
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to commit stats of {kind} {record_id}") from e


class AnswerKeyOption(BaseModel):
    option_id: int
    text: str = ""
    is_correct: bool = False


class AnswerKeyQuestion(BaseModel):
    question_id: int
    options: List[AnswerKeyOption]


class QuizRecord(BaseModel):
    quiz_id: int
    category_id: int
    attempts: int = 0
    average_score: float = 0.0
    questions: List[AnswerKeyQuestion]


class InMemoryStatsStore(StatsStore):
    """Record store without a database, for local runs and tests.

    Reads hand out independent copies, the way a database read does, and
    ``commit_quiz_stats`` overwrites whatever is stored.
    """

    def __init__(self, quizzes: Optional[List[QuizRecord]] = None):
        self.quizzes: Dict[int, QuizRecord] = {q.quiz_id: q.model_copy(deep=True) for q in quizzes or []}
        self.user_stats: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        # per thread: write buffers of the open transactions, innermost last
        self._local = threading.local()

    def add_quiz(self, quiz: QuizRecord) -> None:
        self.quizzes[quiz.quiz_id] = quiz.model_copy(deep=True)

    def get_quiz_with_answer_key(self, quiz_id: int) -> Optional[QuizRecord]:
        stored = self.quizzes.get(quiz_id)
        return stored.model_copy(deep=True) if stored else None

    def commit_quiz_stats(self, quiz: QuizRecord, new_attempts: int, new_average: float) -> None:
        quiz.attempts = new_attempts
        quiz.average_score = new_average
        self._write(self._store_quiz_stats, quiz.quiz_id, new_attempts, new_average)

    def increment_quiz_stats(self, quiz: QuizRecord, percentage_score: float) -> None:
        self._write(self._increment_quiz_stats, quiz, percentage_score)

    def commit_user_stats(self, user) -> None:
        self._write(self._store_user_stats, user.user_id, user_stats_block(user))

    @contextmanager
    def transaction(self):
        """Buffer the writes made inside the block and apply them together on a clean exit.

        Each call owns its buffer, so transactions on other threads, or an
        inner one still open on this thread, neither see nor flush it.
        """
        pending = []
        stack = self._open_buffers()
        stack.append(pending)
        try:
            yield
        finally:
            del stack[next(i for i, b in enumerate(stack) if b is pending)]
        with self._lock:
            for write, args in pending:
                write(*args)

    def _open_buffers(self) -> List[List]:
        if not hasattr(self._local, "buffers"):
            self._local.buffers = []
        return self._local.buffers

    def _write(self, write, *args) -> None:
        buffers = self._open_buffers()
        if buffers:
            buffers[-1].append((write, args))
        else:
            with self._lock:
                write(*args)

    def _store_quiz_stats(self, quiz_id: int, attempts: int, average_score: float) -> None:
        stored = self.quizzes[quiz_id]
        stored.attempts = attempts
        stored.average_score = average_score

    def _increment_quiz_stats(self, quiz: QuizRecord, percentage_score: float) -> None:
        with self._lock:
            stored = self.quizzes[quiz.quiz_id]
            new_attempts = stored.attempts + 1
            new_average = (stored.average_score * stored.attempts + percentage_score) / new_attempts
            stored.attempts, stored.average_score = new_attempts, new_average
        quiz.attempts, quiz.average_score = new_attempts, new_average

    def _store_user_stats(self, user_id: str, block: Dict[str, Any]) -> None:
        self.user_stats[user_id] = block
