from quizapp.router.api.auth import router as auth_router
from quizapp.router.api.categories import router as categories_router
from quizapp.router.api.questions import router as questions_router
from quizapp.router.api.quizzes import router as quizzes_router
from quizapp.router.api.users import router as users_router
__all__ = [
    "auth_router",
    "categories_router",
    "questions_router",
    "quizzes_router",
    "users_router",
]
