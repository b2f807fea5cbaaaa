from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.model.users import User
from quizapp.router.api.logics import category_logic
from quizapp.router.dependencies import get_current_admin
from quizapp.schema.category_schema import CategoryCreate, CategoryOut, CategoryUpdate

router = APIRouter()


@router.get("", response_model=List[CategoryOut], status_code=status.HTTP_200_OK)
async def get_categories(db: Session = Depends(get_db)):
    """All categories, sorted by name."""
    return category_logic.get_categories_logic(db)


@router.get("/{category_id}", response_model=CategoryOut, status_code=status.HTTP_200_OK)
async def get_category(category_id: int, db: Session = Depends(get_db)):
    return category_logic.get_category_logic(db, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(request: CategoryCreate, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    """Create a category. Admin only.

    Raises:
        HTTPException: 400 when a category with the same name exists
    """
    return category_logic.create_category_logic(db, request)


@router.put("/{category_id}", response_model=CategoryOut, status_code=status.HTTP_200_OK)
async def update_category(category_id: int, request: CategoryUpdate, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    return category_logic.update_category_logic(db, category_id, request)


@router.delete("/{category_id}", response_model=dict, status_code=status.HTTP_200_OK)
async def delete_category(category_id: int, db: Session = Depends(get_db), admin: User = Depends(get_current_admin)):
    return category_logic.delete_category_logic(db, category_id)
