from typing import Optional
from datetime import datetime

from quizapp.schema.base_schema import CamelModel


class CategoryCreate(CamelModel):
    name: str
    description: str
    icon: Optional[str] = None
    color: Optional[str] = None


class CategoryUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class CategoryOut(CamelModel):
    id: int
    name: str
    description: str
    icon: str
    color: str
    created_at: Optional[datetime] = None


class CategoryRef(CamelModel):
    id: int
    name: str
