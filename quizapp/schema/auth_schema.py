from typing import Dict, Optional

from pydantic import EmailStr

from quizapp.schema.base_schema import CamelModel


class TokenPayload(CamelModel):
    """Payload for Bearer Access Token"""
    sub: str  # user id
    exp: int
    iat: Optional[int] = None


class UserRegister(CamelModel):
    username: str
    email: EmailStr
    password: str


class LoginRequest(CamelModel):
    email: str
    password: str


class ProfileUpdate(CamelModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    profile_picture: Optional[str] = None


class PasswordUpdate(CamelModel):
    current_password: str
    new_password: str


class CategoryPerformanceOut(CamelModel):
    quizzes_taken: int
    average_score: float


class UserStatsOut(CamelModel):
    total_quizzes_taken: int
    average_score: float
    category_performance: Dict[str, CategoryPerformanceOut]


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    profile_picture: str
    stats: UserStatsOut


class AuthResponse(CamelModel):
    user: UserOut
    token: str
