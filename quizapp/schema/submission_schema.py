from typing import Any, List, Optional
from datetime import datetime

from pydantic import Field

from quizapp.schema.base_schema import CamelModel
from quizapp.schema.category_schema import CategoryOut


##################
### Submission ###
##################
class SubmittedAnswer(CamelModel):
    # Identifiers are matched by equality with the stored ids rendered as
    # strings; anything else simply never matches.
    question_id: Any
    selected_option: Any = None


class QuizSubmission(CamelModel):
    answers: List[SubmittedAnswer]
    time_taken: float = Field(ge=0)


class QuestionVerdict(CamelModel):
    question_id: str
    correct: bool
    selected_option: Any = None
    correct_option: str


class SubmissionResult(CamelModel):
    score: int
    total_questions: int
    percentage_score: float
    time_taken: float
    results: List[QuestionVerdict]


###############
### History ###
###############
class AttemptQuizOut(CamelModel):
    id: int
    title: str
    category: Optional[CategoryOut] = None


class AttemptOut(CamelModel):
    id: int
    quiz_id: Optional[int] = None
    score: float
    total_questions: int
    time_taken: float
    attempted_at: Optional[datetime] = None
    quiz: Optional[AttemptQuizOut] = None


class AttemptsOut(CamelModel):
    results: List[AttemptOut]
