from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel

from quizapp.exceptions import InternalConsistencyError
from quizapp.schema.submission_schema import QuestionVerdict, SubmittedAnswer


class ScoreOutcome(BaseModel):
    correct_count: int
    total_questions: int
    percentage_score: float
    verdicts: List[QuestionVerdict]


def find_correct_option(question):
    """Return the option flagged correct. A question without one is broken data."""
    for option in question.options:
        if option.is_correct:
            return option
    raise InternalConsistencyError(f"Question {question.question_id} has no correct option")


def find_answer(answers: Iterable[SubmittedAnswer], question_id: str) -> Optional[SubmittedAnswer]:
    # first match wins when a question is answered twice
    for answer in answers:
        if answer.question_id == question_id:
            return answer
    return None


def score_submission(questions: Sequence, answers: Sequence[SubmittedAnswer]) -> ScoreOutcome:
    """Score a submission against the quiz's answer key.

    Questions are walked in quiz order. An unanswered question counts as
    incorrect. Selected options are compared to the correct option's
    identifier, never to its text.

    Args:
        questions (Sequence): The quiz questions, each exposing ``question_id``
            and ``options`` with ``option_id`` and ``is_correct``.
        answers (Sequence[SubmittedAnswer]): The submitted answers, possibly incomplete.

    Raises:
        InternalConsistencyError: The quiz has no questions or a question has no correct option.

    Returns:
        ScoreOutcome: Correct count, percentage and one verdict per question.
    """
    total_questions = len(questions)
    if total_questions == 0:
        raise InternalConsistencyError("Quiz has no questions")

    correct_count = 0
    verdicts = []
    for question in questions:
        question_id = str(question.question_id)
        correct_option_id = str(find_correct_option(question).option_id)
        answer = find_answer(answers, question_id)
        selected = answer.selected_option if answer else None
        correct = answer is not None and selected == correct_option_id
        if correct:
            correct_count += 1
        verdicts.append(QuestionVerdict(
            question_id=question_id,
            correct=correct,
            selected_option=selected,
            correct_option=correct_option_id,
        ))

    return ScoreOutcome(
        correct_count=correct_count,
        total_questions=total_questions,
        percentage_score=100 * correct_count / total_questions,
        verdicts=verdicts,
    )
