from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "Quiz App"
    API_VERSION: str = "1.0.0"
    ENV: str = "development"
    FRONTEND_URL: str = "http://localhost:3000"
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # auth
    SECRET_KEY: str = "quiz-app-jwt-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # database
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "quiz_app"
    DATABASE_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    # submission engine
    QUIZ_STATS_UPDATE: str = "read_modify_write"
    SUBMISSION_COMMIT: str = "sequential"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("QUIZ_STATS_UPDATE")
    @classmethod
    def validate_stats_update(cls, v: str) -> str:
        if v not in ("read_modify_write", "atomic"):
            raise ValueError("QUIZ_STATS_UPDATE must be 'read_modify_write' or 'atomic'")
        return v

    @field_validator("SUBMISSION_COMMIT")
    @classmethod
    def validate_submission_commit(cls, v: str) -> str:
        if v not in ("sequential", "transactional"):
            raise ValueError("SUBMISSION_COMMIT must be 'sequential' or 'transactional'")
        return v


settings = Settings()
