from quizapp.model import categories, questions, quizzes, attempts, category_performance, users

__all__ = ["categories", "questions", "quizzes", "attempts", "category_performance", "users"]
