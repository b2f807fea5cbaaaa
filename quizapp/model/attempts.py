from sqlalchemy import Column, String, ForeignKey, DateTime, Integer, Float
from sqlalchemy.orm import relationship
from quizapp.database.base_class import Base
from datetime import datetime


class Attempt(Base):
    __tablename__ = "attempts"

    attempt_id = Column(Integer, index=True, primary_key=True, autoincrement=True)

    # FK
    user_id = Column(String(12), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    quiz_id = Column(Integer, ForeignKey("quizzes.quiz_id", ondelete="SET NULL"), nullable=True)

    # attributes
    score = Column(Float, nullable=False)  # percentage
    total_questions = Column(Integer, nullable=False)
    time_taken = Column(Float, nullable=False)
    attempted_at = Column(DateTime, default=datetime.now)

    # relationship
    user = relationship("User", back_populates="attempts")
    quiz = relationship("Quiz")
