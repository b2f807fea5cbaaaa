import math
import threading

import pytest

from quizapp.exceptions import (
    InternalConsistencyError,
    NotFoundError,
    PersistenceError,
    SubmissionValidationError,
)
from quizapp.model.users import User
from quizapp.router.service.submission_service import (
    AnswerKeyOption,
    AnswerKeyQuestion,
    InMemoryStatsStore,
    QuizRecord,
    record_quiz_attempt,
    submit_quiz,
)

QUIZ_ID = 1
CATEGORY_ID = 7


def make_record(quiz_id=QUIZ_ID, n=5) -> QuizRecord:
    questions = [
        AnswerKeyQuestion(
            question_id=100 + i,
            options=[AnswerKeyOption(option_id=(100 + i) * 10 + p, is_correct=(p == 2)) for p in range(4)],
        )
        for i in range(n)
    ]
    return QuizRecord(quiz_id=quiz_id, category_id=CATEGORY_ID, questions=questions)


def make_answers(record: QuizRecord, correct: int) -> list:
    answers = []
    for i, q in enumerate(record.questions):
        option = q.options[2] if i < correct else q.options[0]
        answers.append({"questionId": str(q.question_id), "selectedOption": str(option.option_id)})
    return answers


def new_user(user_id="300000000001") -> User:
    return User(
        user_id=user_id,
        username=f"user{user_id}",
        email=f"{user_id}@example.com",
        hashed_password="x",
        total_quizzes_taken=0,
        average_score=0.0,
    )


@pytest.fixture
def store():
    return InMemoryStatsStore([make_record()])


class FailingUserStore(InMemoryStatsStore):
    def commit_user_stats(self, user):
        raise PersistenceError("user store unavailable")


class TestSubmitQuiz:

    def test_three_of_five(self, store):
        user = new_user()
        result = submit_quiz(store, user, QUIZ_ID, {"answers": make_answers(make_record(), 3), "timeTaken": 95})

        assert result.score == 3
        assert result.total_questions == 5
        assert result.percentage_score == 60.0
        assert result.time_taken == 95
        assert len(result.results) == 5
        assert [r.correct for r in result.results] == [True, True, True, False, False]

        stored = store.quizzes[QUIZ_ID]
        assert (stored.attempts, stored.average_score) == (1, 60.0)

        block = store.user_stats[user.user_id]
        assert block["total_quizzes_taken"] == 1
        assert block["average_score"] == 60.0
        assert block["category_performance"][CATEGORY_ID] == {"quizzes_taken": 1, "average_score": 60.0}

    def test_response_uses_wire_names(self, store):
        result = submit_quiz(store, new_user(), QUIZ_ID, {"answers": [], "timeTaken": 10})
        body = result.model_dump(by_alias=True)
        assert set(body) == {"score", "totalQuestions", "percentageScore", "timeTaken", "results"}
        assert set(body["results"][0]) == {"questionId", "correct", "selectedOption", "correctOption"}

    def test_unknown_quiz_changes_nothing(self, store):
        user = new_user()
        with pytest.raises(NotFoundError):
            submit_quiz(store, user, 999, {"answers": [], "timeTaken": 10})
        assert store.quizzes[QUIZ_ID].attempts == 0
        assert store.user_stats == {}
        assert user.total_quizzes_taken == 0

    @pytest.mark.parametrize("payload", [
        {"answers": "not a list", "timeTaken": 10},
        {"answers": []},
        {"answers": [{"selectedOption": "1"}], "timeTaken": 10},
    ])
    def test_malformed_payload_is_rejected_before_scoring(self, store, payload):
        with pytest.raises(SubmissionValidationError):
            submit_quiz(store, new_user(), QUIZ_ID, payload)
        assert store.quizzes[QUIZ_ID].attempts == 0

    def test_broken_quiz_is_an_internal_error(self):
        broken = make_record()
        for option in broken.questions[0].options:
            option.is_correct = False
        store = InMemoryStatsStore([broken])
        with pytest.raises(InternalConsistencyError):
            submit_quiz(store, new_user(), QUIZ_ID, {"answers": [], "timeTaken": 10})
        assert store.quizzes[QUIZ_ID].attempts == 0

    def test_sequential_mean_over_many_submissions(self, store):
        user = new_user()
        scores = []
        for correct in [3, 5, 0, 1, 4, 2]:
            result = submit_quiz(store, user, QUIZ_ID, {"answers": make_answers(make_record(), correct), "timeTaken": 30})
            scores.append(result.percentage_score)

        stored = store.quizzes[QUIZ_ID]
        assert stored.attempts == len(scores)
        assert math.isclose(stored.average_score, sum(scores) / len(scores), rel_tol=1e-9)
        assert math.isclose(store.user_stats[user.user_id]["average_score"], sum(scores) / len(scores), rel_tol=1e-12)
        assert len(store.user_stats[user.user_id]["attempts"]) == len(scores)


class TestPartialFailure:

    def test_sequential_mode_keeps_quiz_update_when_user_write_fails(self):
        store = FailingUserStore([make_record()])
        with pytest.raises(PersistenceError):
            submit_quiz(store, new_user(), QUIZ_ID, {"answers": make_answers(make_record(), 5), "timeTaken": 10},
                        commit_mode="sequential")
        assert store.quizzes[QUIZ_ID].attempts == 1
        assert store.quizzes[QUIZ_ID].average_score == 100.0
        assert store.user_stats == {}

    def test_transactional_mode_writes_nothing_when_user_write_fails(self):
        store = FailingUserStore([make_record()])
        with pytest.raises(PersistenceError):
            submit_quiz(store, new_user(), QUIZ_ID, {"answers": make_answers(make_record(), 5), "timeTaken": 10},
                        commit_mode="transactional")
        assert store.quizzes[QUIZ_ID].attempts == 0
        assert store.quizzes[QUIZ_ID].average_score == 0.0

    def test_transactional_mode_commits_both(self, store):
        user = new_user()
        submit_quiz(store, user, QUIZ_ID, {"answers": make_answers(make_record(), 4), "timeTaken": 10},
                    commit_mode="transactional", stats_mode="atomic")
        assert store.quizzes[QUIZ_ID].attempts == 1
        assert store.quizzes[QUIZ_ID].average_score == 80.0
        assert store.user_stats[user.user_id]["total_quizzes_taken"] == 1


class TestConcurrentSubmissions:
    """Two submissions that both read the quiz before either writes."""

    def test_read_modify_write_loses_an_update(self, store):
        first = store.get_quiz_with_answer_key(QUIZ_ID)
        second = store.get_quiz_with_answer_key(QUIZ_ID)

        record_quiz_attempt(store, first, 100.0, "read_modify_write")
        record_quiz_attempt(store, second, 50.0, "read_modify_write")

        stored = store.quizzes[QUIZ_ID]
        assert stored.attempts == 1
        assert stored.average_score == 50.0

    def test_atomic_increment_keeps_both(self, store):
        first = store.get_quiz_with_answer_key(QUIZ_ID)
        second = store.get_quiz_with_answer_key(QUIZ_ID)

        record_quiz_attempt(store, first, 100.0, "atomic")
        record_quiz_attempt(store, second, 50.0, "atomic")

        stored = store.quizzes[QUIZ_ID]
        assert stored.attempts == 2
        assert stored.average_score == 75.0
        assert second.attempts == 2


class TestOverlappingTransactions:
    """Each transaction applies or drops only the writes made inside it."""

    def test_failed_inner_transaction_is_not_flushed_by_outer(self, store):
        outer = store.transaction()
        inner = store.transaction()
        outer.__enter__()
        inner.__enter__()
        record_quiz_attempt(store, store.get_quiz_with_answer_key(QUIZ_ID), 100.0)

        outer.__exit__(None, None, None)
        assert store.quizzes[QUIZ_ID].attempts == 0

        failure = RuntimeError("user write failed")
        assert inner.__exit__(RuntimeError, failure, None) is False
        assert store.quizzes[QUIZ_ID].attempts == 0
        assert store.quizzes[QUIZ_ID].average_score == 0.0

    def test_nested_transactions_both_commit(self, store):
        with store.transaction():
            record_quiz_attempt(store, store.get_quiz_with_answer_key(QUIZ_ID), 100.0, "atomic")
            with store.transaction():
                record_quiz_attempt(store, store.get_quiz_with_answer_key(QUIZ_ID), 50.0, "atomic")
            assert store.quizzes[QUIZ_ID].attempts == 1

        assert store.quizzes[QUIZ_ID].attempts == 2
        assert store.quizzes[QUIZ_ID].average_score == 75.0

    def test_transaction_on_another_thread_is_isolated(self, store):
        written, release = threading.Event(), threading.Event()

        def failing_submission():
            try:
                with store.transaction():
                    record_quiz_attempt(store, store.get_quiz_with_answer_key(QUIZ_ID), 100.0, "atomic")
                    written.set()
                    release.wait(5)
                    raise RuntimeError("user write failed")
            except RuntimeError:
                pass

        worker = threading.Thread(target=failing_submission)
        worker.start()
        assert written.wait(5)

        # no transaction open on this thread: applied at once
        record_quiz_attempt(store, store.get_quiz_with_answer_key(QUIZ_ID), 50.0, "atomic")
        assert store.quizzes[QUIZ_ID].attempts == 1

        release.set()
        worker.join(5)
        assert store.quizzes[QUIZ_ID].attempts == 1
        assert store.quizzes[QUIZ_ID].average_score == 50.0
