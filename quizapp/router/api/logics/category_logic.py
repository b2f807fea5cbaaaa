from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from quizapp.model.categories import Category
from quizapp.model.questions import Question
from quizapp.model.quizzes import Quiz
from quizapp.schema.category_schema import CategoryCreate, CategoryOut, CategoryUpdate


def category_out(c: Category) -> CategoryOut:
    return CategoryOut(
        id=c.category_id,
        name=c.name,
        description=c.description,
        icon=c.icon,
        color=c.color,
        created_at=c.created_at,
    )


def get_category_or_404(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.category_id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def get_categories_logic(db: Session) -> List[CategoryOut]:
    categories = db.query(Category).order_by(Category.name.asc()).all()
    return [category_out(c) for c in categories]


def get_category_logic(db: Session, category_id: int) -> CategoryOut:
    return category_out(get_category_or_404(db, category_id))


def create_category_logic(db: Session, request: CategoryCreate) -> CategoryOut:
    if db.query(Category).filter(Category.name == request.name).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")

    category = Category(name=request.name, description=request.description)
    if request.icon:
        category.icon = request.icon
    if request.color:
        category.color = request.color
    db.add(category)
    db.commit()
    db.refresh(category)
    return category_out(category)


def update_category_logic(db: Session, category_id: int, request: CategoryUpdate) -> CategoryOut:
    category = get_category_or_404(db, category_id)

    if request.name and request.name != category.name:
        if db.query(Category).filter(Category.name == request.name).first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name already exists")

    for field, value in request.model_dump(exclude_none=True).items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return category_out(category)


def delete_category_logic(db: Session, category_id: int) -> dict:
    category = get_category_or_404(db, category_id)

    in_use = (
        db.query(Question).filter(Question.category_id == category_id).first()
        or db.query(Quiz).filter(Quiz.category_id == category_id).first()
    )
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category still has questions or quizzes",
        )

    db.delete(category)
    db.commit()
    return {"message": "Category removed"}
