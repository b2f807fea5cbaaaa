from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship
from quizapp.database.base_class import Base
from datetime import datetime


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # attributes
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(512), nullable=False)
    icon = Column(String(255), default="default-category-icon.png")
    color = Column(String(7), default="#1976D2")
    created_at = Column(DateTime, default=datetime.now)

    # relationship
    questions = relationship("Question", back_populates="category")
    quizzes = relationship("Quiz", back_populates="category")
