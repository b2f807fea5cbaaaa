from typing import List, Literal, Optional
from datetime import datetime

from quizapp.schema.base_schema import CamelModel
from quizapp.schema.category_schema import CategoryRef

Difficulty = Literal["easy", "medium", "hard"]


################
### Question ###
################
class OptionIn(CamelModel):
    text: str
    is_correct: bool


class QuestionCreate(CamelModel):
    text: str
    options: List[OptionIn]
    explanation: str = ""
    category: int
    difficulty: Difficulty = "medium"


class QuestionUpdate(CamelModel):
    text: Optional[str] = None
    options: Optional[List[OptionIn]] = None
    explanation: Optional[str] = None
    category: Optional[int] = None
    difficulty: Optional[Difficulty] = None


class OptionOut(CamelModel):
    """An option as shown to quiz takers: no correctness flag."""
    id: str
    text: str


class OptionWithKeyOut(OptionOut):
    is_correct: bool


class QuestionPublicOut(CamelModel):
    id: str
    text: str
    options: List[OptionOut]
    difficulty: str


class QuestionOut(CamelModel):
    id: str
    text: str
    options: List[OptionWithKeyOut]
    explanation: str
    category: CategoryRef
    difficulty: str
    created_at: Optional[datetime] = None
