from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, Integer, Text
from sqlalchemy.orm import relationship
from quizapp.database.base_class import Base
from datetime import datetime


class Question(Base):
    __tablename__ = "questions"

    question_id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # FK
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)

    # attributes
    text = Column(String(1024), nullable=False)
    explanation = Column(Text, nullable=False, default="")
    difficulty = Column(String(10), nullable=False, default="medium")
    created_at = Column(DateTime, default=datetime.now)

    # relationship
    category = relationship("Category", back_populates="questions")
    options = relationship(
        "QuestionOption",
        back_populates="question",
        order_by="QuestionOption.position",
        cascade="all, delete-orphan",
    )


class QuestionOption(Base):
    __tablename__ = "question_options"

    option_id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # FK
    question_id = Column(Integer, ForeignKey("questions.question_id", ondelete="CASCADE"), nullable=False)

    # attributes
    position = Column(Integer, nullable=False)
    text = Column(String(512), nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    # relationship
    question = relationship("Question", back_populates="options")
