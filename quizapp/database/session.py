from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from quizapp.config import Settings, settings

# connection pool for server databases; SQLite keeps SQLAlchemy's default
POOL_OPTIONS = dict(
    pool_size=5,
    max_overflow=0,
    pool_timeout=30,
    pool_recycle=1800,
    pool_pre_ping=True,
)


def build_sqlalchemy_database_url_from_settings(_settings: Settings) -> str:
    """DATABASE_URL if it is set, otherwise a psycopg URL assembled from the POSTGRES_* settings."""
    if _settings.DATABASE_URL:
        return _settings.DATABASE_URL
    return (
        f"postgresql+psycopg://{_settings.POSTGRES_USER}:{_settings.POSTGRES_PASSWORD}"
        f"@{_settings.POSTGRES_HOST}:{_settings.POSTGRES_PORT}/{_settings.POSTGRES_DB}"
    )


def get_engine(database_url: str, echo=False) -> Engine:
    if database_url.startswith("sqlite"):
        # sessions are handed across FastAPI's threadpool
        return create_engine(database_url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(database_url, echo=echo, **POOL_OPTIONS)


def get_local_session(database_url: str, echo=False) -> sessionmaker:
    """Session factory bound to its own engine, for scripts run outside the app."""
    return sessionmaker(
        bind=get_engine(database_url, echo),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


SQLALCHEMY_DATABASE_URL = build_sqlalchemy_database_url_from_settings(settings)
