from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.database import get_db
from quizapp.model.users import User
from quizapp.router.api.logics import auth_logic
from quizapp.router.dependencies import get_current_user
from quizapp.schema.auth_schema import (
    AuthResponse,
    LoginRequest,
    PasswordUpdate,
    ProfileUpdate,
    UserOut,
    UserRegister,
)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: UserRegister, db: Session = Depends(get_db)):
    """Register a new user and return it together with an access token

    Args:
        request (UserRegister): username, email and password
        db (Session): Database session

    Raises:
        HTTPException: 400 when the email or username is already taken

    Returns:
        AuthResponse: the new user's profile and a bearer token
    """
    return auth_logic.register_logic(db, request)


@router.post("/login", response_model=AuthResponse, status_code=status.HTTP_200_OK)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Login with email and password"""
    return auth_logic.login_logic(db, request)


@router.get("/current", response_model=UserOut, status_code=status.HTTP_200_OK)
async def get_current(user: User = Depends(get_current_user)):
    return auth_logic.user_out(user)


@router.put("/profile", response_model=UserOut, status_code=status.HTTP_200_OK)
async def update_profile(request: ProfileUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Update username, email or profile picture of the current user"""
    return auth_logic.update_profile_logic(db, user, request)


@router.put("/password", response_model=dict, status_code=status.HTTP_200_OK)
async def update_password(request: PasswordUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return auth_logic.update_password_logic(db, user, request)
