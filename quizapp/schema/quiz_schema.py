from typing import List, Optional
from datetime import datetime

from quizapp.schema.base_schema import CamelModel
from quizapp.schema.category_schema import CategoryOut
from quizapp.schema.question_schema import QuestionOut, QuestionPublicOut


############
### Quiz ###
############
class QuizCreate(CamelModel):
    title: str
    description: str
    category: int
    questions: List[int]
    time_limit: int = 600
    is_published: Optional[bool] = None


class QuizUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[int] = None
    questions: Optional[List[int]] = None
    time_limit: Optional[int] = None
    is_published: Optional[bool] = None


class CreatorOut(CamelModel):
    id: str
    username: str


class QuizSummaryOut(CamelModel):
    id: int
    title: str
    description: str
    category: CategoryOut
    created_by: Optional[CreatorOut] = None
    question_count: int
    time_limit: int
    is_published: bool
    attempts: int
    average_score: float
    created_at: Optional[datetime] = None


class QuizDetailOut(QuizSummaryOut):
    questions: List[QuestionPublicOut]


class QuizFullOut(QuizSummaryOut):
    questions: List[QuestionOut]
