"""Create every quizapp table in the configured database and list what exists afterwards."""
from sqlalchemy import inspect

import quizapp.model  # noqa: F401  registers every table on Base.metadata
from quizapp.database.base_class import Base
from quizapp.database.session import SQLALCHEMY_DATABASE_URL, get_engine


if __name__ == "__main__":
    engine = get_engine(SQLALCHEMY_DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    print("Tables created:", ", ".join(sorted(inspect(engine).get_table_names())))
