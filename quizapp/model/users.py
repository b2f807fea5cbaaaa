from sqlalchemy import Column, String, Boolean, DateTime, Integer, Float
from sqlalchemy.orm import relationship, attribute_keyed_dict
from quizapp.database.base_class import Base
from datetime import datetime
from quizapp.model.attempts import Attempt
from quizapp.model.category_performance import CategoryPerformance
from quizapp.model.quizzes import Quiz


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(12), primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    profile_picture = Column(String(512), nullable=False, default="")
    is_admin = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.now)

    # running aggregates
    total_quizzes_taken = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0.0)

    attempts = relationship(
        "Attempt", back_populates="user", order_by="Attempt.attempt_id", cascade="all, delete-orphan"
    )
    category_performance = relationship(
        "CategoryPerformance",
        back_populates="user",
        collection_class=attribute_keyed_dict("category_id"),
        cascade="all, delete-orphan",
    )
    quizzes = relationship("Quiz", back_populates="creator")
