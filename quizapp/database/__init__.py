from quizapp.database.db import get_db, get_ctx_db, SessionLocal, ENGINE
from quizapp.database.base_class import Base

__all__ = ["get_db", "get_ctx_db", "SessionLocal", "ENGINE", "Base"]
