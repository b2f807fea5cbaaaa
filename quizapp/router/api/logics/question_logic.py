from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, selectinload

from quizapp.model.questions import Question, QuestionOption
from quizapp.model.quizzes import QuizQuestion
from quizapp.router.api.logics.category_logic import get_category_or_404
from quizapp.schema.category_schema import CategoryRef
from quizapp.schema.question_schema import (
    OptionIn,
    OptionOut,
    OptionWithKeyOut,
    QuestionCreate,
    QuestionOut,
    QuestionPublicOut,
    QuestionUpdate,
)

OPTIONS_PER_QUESTION = 4


def validate_options(options: List[OptionIn]) -> None:
    """A question has exactly four options, exactly one of them correct."""
    if len(options) != OPTIONS_PER_QUESTION:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Each question must have exactly 4 options",
        )
    if sum(1 for o in options if o.is_correct) != 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Each question must have exactly one correct answer",
        )


def build_options(options: List[OptionIn]) -> List[QuestionOption]:
    return [
        QuestionOption(position=i, text=o.text, is_correct=o.is_correct)
        for i, o in enumerate(options)
    ]


def question_public_out(q: Question) -> QuestionPublicOut:
    return QuestionPublicOut(
        id=str(q.question_id),
        text=q.text,
        options=[OptionOut(id=str(o.option_id), text=o.text) for o in q.options],
        difficulty=q.difficulty,
    )


def question_out(q: Question) -> QuestionOut:
    return QuestionOut(
        id=str(q.question_id),
        text=q.text,
        options=[
            OptionWithKeyOut(id=str(o.option_id), text=o.text, is_correct=o.is_correct)
            for o in q.options
        ],
        explanation=q.explanation or "",
        category=CategoryRef(id=q.category.category_id, name=q.category.name),
        difficulty=q.difficulty,
        created_at=q.created_at,
    )


def get_question_or_404(db: Session, question_id: int) -> Question:
    question = (
        db.query(Question)
        .options(selectinload(Question.options))
        .filter(Question.question_id == question_id)
        .first()
    )
    if not question:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found")
    return question


def get_questions_logic(db: Session, category: Optional[int], difficulty: Optional[str]) -> List[QuestionOut]:
    query = db.query(Question).options(selectinload(Question.options))
    if category is not None:
        query = query.filter(Question.category_id == category)
    if difficulty:
        query = query.filter(Question.difficulty == difficulty)
    questions = query.order_by(Question.created_at.desc(), Question.question_id.desc()).all()
    return [question_out(q) for q in questions]


def get_question_logic(db: Session, question_id: int) -> QuestionOut:
    return question_out(get_question_or_404(db, question_id))


def get_questions_by_category_logic(db: Session, category_id: int) -> List[QuestionPublicOut]:
    """Questions of one category for quiz takers, with the answer key stripped."""
    questions = (
        db.query(Question)
        .options(selectinload(Question.options))
        .filter(Question.category_id == category_id)
        .order_by(Question.created_at.desc(), Question.question_id.desc())
        .all()
    )
    return [question_public_out(q) for q in questions]


def create_question_logic(db: Session, request: QuestionCreate) -> QuestionOut:
    get_category_or_404(db, request.category)
    validate_options(request.options)

    question = Question(
        text=request.text,
        explanation=request.explanation,
        category_id=request.category,
        difficulty=request.difficulty,
        options=build_options(request.options),
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question_out(question)


def update_question_logic(db: Session, question_id: int, request: QuestionUpdate) -> QuestionOut:
    question = get_question_or_404(db, question_id)

    if request.category is not None and request.category != question.category_id:
        get_category_or_404(db, request.category)
        question.category_id = request.category
    if request.options is not None:
        validate_options(request.options)
        question.options = build_options(request.options)
    if request.text is not None:
        question.text = request.text
    if request.explanation is not None:
        question.explanation = request.explanation
    if request.difficulty is not None:
        question.difficulty = request.difficulty

    db.commit()
    db.refresh(question)
    return question_out(question)


def delete_question_logic(db: Session, question_id: int) -> dict:
    """Delete a question and unlink it from its quizzes. Refused while it is the last question of a quiz."""
    question = get_question_or_404(db, question_id)

    linked_quiz_ids = {
        row.quiz_id
        for row in db.query(QuizQuestion.quiz_id).filter(QuizQuestion.question_id == question_id)
    }
    if linked_quiz_ids:
        quizzes_left_with_questions = {
            row.quiz_id
            for row in db.query(QuizQuestion.quiz_id)
            .filter(QuizQuestion.quiz_id.in_(linked_quiz_ids), QuizQuestion.question_id != question_id)
            .distinct()
        }
        if linked_quiz_ids - quizzes_left_with_questions:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Question is the only question of a quiz",
            )

    db.query(QuizQuestion).filter(QuizQuestion.question_id == question_id).delete(synchronize_session=False)
    db.delete(question)
    db.commit()
    return {"message": "Question removed"}
