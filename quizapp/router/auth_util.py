from datetime import datetime, timedelta, timezone
from typing import Any, Union

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
import random

from quizapp.config import settings
from quizapp.model.users import User


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def create_access_token(subject: Union[str, Any], expires_delta: timedelta = None) -> str:
    """
    Signs a bearer token for a user.

    Parameters:
        subject (Union[str, Any]): The user id, stored as the ``sub`` claim.
        expires_delta (timedelta, optional): Token lifetime. Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: The signed JWT.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": str(subject), "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def generate_unique_user_id(db: Session) -> str:
    """Random 12-digit id not yet taken by any user."""
    while True:
        candidate = str(random.randint(10**11, 10**12 - 1))
        if db.query(User.user_id).filter(User.user_id == candidate).first() is None:
            return candidate
