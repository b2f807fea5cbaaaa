from sqlalchemy import Column, String, ForeignKey, Integer, Float
from sqlalchemy.orm import relationship
from quizapp.database.base_class import Base


class CategoryPerformance(Base):
    __tablename__ = "category_performance"

    # PK
    user_id = Column(String(12), ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), primary_key=True)

    # attributes
    quizzes_taken = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0.0)

    # relationship
    user = relationship("User", back_populates="category_performance")
