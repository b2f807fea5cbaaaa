from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, Integer, Float
from sqlalchemy.orm import relationship
from quizapp.database.base_class import Base
from datetime import datetime


class Quiz(Base):
    __tablename__ = "quizzes"

    quiz_id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # FK
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)
    creator_id = Column(String(12), ForeignKey("users.user_id"), nullable=False)

    # attributes
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=False)
    time_limit = Column(Integer, nullable=False, default=600)  # seconds
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)

    # running aggregates
    attempts = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0.0)

    # relationship
    category = relationship("Category", back_populates="quizzes")
    creator = relationship("User", back_populates="quizzes")
    question_links = relationship(
        "QuizQuestion",
        back_populates="quiz",
        order_by="QuizQuestion.position",
        cascade="all, delete-orphan",
    )

    @property
    def questions(self):
        return [link.question for link in self.question_links]

    @property
    def question_count(self) -> int:
        return len(self.question_links)


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # FK
    quiz_id = Column(Integer, ForeignKey("quizzes.quiz_id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.question_id", ondelete="CASCADE"), nullable=False)

    position = Column(Integer, nullable=False)

    # relationship
    quiz = relationship("Quiz", back_populates="question_links")
    question = relationship("Question")
