from typing import Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from growth_diary.core.database import get_db
from growth_diary.auth.schemas import (
    AuthResponse,
    AuthStatus,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UserOut,
)
from growth_diary.auth.service import (
    get_current_user_id,
    handle_change_password,
    handle_login,
    handle_register,
    session_user,
    start_session,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User created and logged in"},
        400: {"description": "Username taken or validation error"},
        500: {"description": "Registration failed"},
    },
)
def register_route(
    req: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> AuthResponse:
    try:
        user = handle_register(req, db)
        start_session(request, user)
        return AuthResponse(message="Registration successful", user=UserOut.model_validate(user))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Registration failed: {e}")
        raise HTTPException(status_code=500, detail="Server error during registration")


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and start a session",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        500: {"description": "Server error"},
    },
)
def login_route(
    req: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> AuthResponse:
    try:
        user = handle_login(req, db)
        start_session(request, user)
        return AuthResponse(message="Login successful", user=UserOut.model_validate(user))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}")
        raise HTTPException(status_code=500, detail="Server error during login")


@router.post(
    "/logout",
    summary="Log out and clear the session",
    responses={
        200: {"description": "User logged out successfully"},
    },
)
def logout_route(request: Request) -> Dict[str, str]:
    request.session.clear()
    return {"message": "Logged out successfully"}


@router.get(
    "/status",
    response_model=AuthStatus,
    response_model_exclude_none=True,
    summary="Check whether the browser holds a session",
)
def status_route(request: Request) -> AuthStatus:
    user = session_user(request)
    if user is None:
        return AuthStatus(authenticated=False)
    return AuthStatus(authenticated=True, user=user)


@router.post(
    "/change-password",
    summary="Change the current user's password",
    responses={
        200: {"description": "Password changed"},
        401: {"description": "Unauthorized or wrong current password"},
        500: {"description": "Server error"},
    },
)
def change_password_route(
    req: ChangePasswordRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        handle_change_password(req, user_id, db)
        return {"message": "Password changed successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Change password failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Server error")
