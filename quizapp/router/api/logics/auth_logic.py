from datetime import timedelta

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from quizapp.config import settings
from quizapp.log import get_logger
from quizapp.model.users import User
from quizapp.router.auth_util import (
    create_access_token,
    generate_unique_user_id,
    get_password_hash,
    verify_password,
)
from quizapp.schema.auth_schema import (
    AuthResponse,
    CategoryPerformanceOut,
    LoginRequest,
    PasswordUpdate,
    ProfileUpdate,
    UserOut,
    UserRegister,
    UserStatsOut,
)

log = get_logger(__name__)


def user_stats_out(user: User) -> UserStatsOut:
    return UserStatsOut(
        total_quizzes_taken=user.total_quizzes_taken or 0,
        average_score=user.average_score or 0.0,
        category_performance={
            str(category_id): CategoryPerformanceOut(
                quizzes_taken=p.quizzes_taken,
                average_score=p.average_score,
            )
            for category_id, p in user.category_performance.items()
        },
    )


def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.user_id,
        username=user.username,
        email=user.email,
        profile_picture=user.profile_picture or "",
        stats=user_stats_out(user),
    )


def _issue_token(user: User) -> str:
    return create_access_token(
        subject=user.user_id,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def register_logic(db: Session, request: UserRegister) -> AuthResponse:
    """Create an account and log it in."""
    existing = db.query(User).filter(
        or_(User.email == request.email, User.username == request.username)
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email or username already exists",
        )

    user = User(
        user_id=generate_unique_user_id(db),
        username=request.username,
        email=request.email,
        hashed_password=get_password_hash(request.password),
        profile_picture="",
        total_quizzes_taken=0,
        average_score=0.0,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("registered user %s", user.user_id)

    return AuthResponse(user=user_out(user), token=_issue_token(user))


def login_logic(db: Session, request: LoginRequest) -> AuthResponse:
    user = db.query(User).filter(User.email == request.email).first()
    if not user or not verify_password(request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email or password",
        )
    return AuthResponse(user=user_out(user), token=_issue_token(user))


def update_profile_logic(db: Session, user: User, request: ProfileUpdate) -> UserOut:
    """Update username, email and/or profile picture. Username and email stay unique."""
    clashes = []
    if request.username:
        clashes.append(User.username == request.username)
    if request.email:
        clashes.append(User.email == request.email)

    if clashes:
        existing = db.query(User).filter(User.user_id != user.user_id, or_(*clashes)).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username or email already in use",
            )

    if request.username:
        user.username = request.username
    if request.email:
        user.email = request.email
    if request.profile_picture:
        user.profile_picture = request.profile_picture

    db.commit()
    db.refresh(user)
    return user_out(user)


def update_password_logic(db: Session, user: User, request: PasswordUpdate) -> dict:
    if not verify_password(request.current_password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    user.hashed_password = get_password_hash(request.new_password)
    db.commit()
    return {"message": "Password updated successfully"}
