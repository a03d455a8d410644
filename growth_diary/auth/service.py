import logging
from typing import Optional

from fastapi import HTTPException, Request
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from growth_diary.activity.db import log_activity
from growth_diary.auth.models import User
from growth_diary.auth.schemas import ChangePasswordRequest, LoginRequest, RegisterRequest, UserOut
from growth_diary.core.config import BCRYPT_ROUNDS
from growth_diary.notifications.db import create_default_settings

# Initialize logger and security tools
logger = logging.getLogger(__name__)
pwd = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"


def hash_password(password: str) -> str:
    """
    Hashes a plaintext password using bcrypt.

    Args:
        password (str): Raw password input.

    Returns:
        str: Bcrypt-hashed password.
    """
    return pwd.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plaintext password against a bcrypt hash.

    Args:
        plain_password (str): Input password to check.
        hashed_password (str): Stored hashed password.

    Returns:
        bool: True if match, False otherwise.
    """
    return pwd.verify(plain_password, hashed_password)


def start_session(request: Request, user: User) -> None:
    request.session[SESSION_USER_ID] = user.id
    request.session[SESSION_USERNAME] = user.username


def session_user(request: Request) -> Optional[UserOut]:
    user_id = request.session.get(SESSION_USER_ID)
    if not user_id:
        return None
    return UserOut(id=user_id, username=request.session.get(SESSION_USERNAME, ""))


def get_current_user_id(request: Request) -> int:
    """
    Extracts the user ID from the signed session cookie.

    Raises:
        HTTPException: 401 when no user is logged in.
    """
    user_id = request.session.get(SESSION_USER_ID)
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return int(user_id)


def handle_register(req: RegisterRequest, db: Session) -> User:
    """
    Creates a user with default notification settings.

    Args:
        req (RegisterRequest): Validated username and password.
        db (Session): DB session.

    Returns:
        User: The newly created user.
    """
    if db.query(User).filter(User.username == req.username).first():
        raise HTTPException(status_code=400, detail="Username already exists")

    user = User(username=req.username, password_hash=hash_password(req.password))
    db.add(user)
    db.flush()
    create_default_settings(db, user.id, commit=False)
    db.commit()
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


def handle_login(req: LoginRequest, db: Session) -> User:
    """
    Handles login via username and password and records a login activity.

    Args:
        req (LoginRequest): Username and password credentials.
        db (Session): DB session.

    Returns:
        User: The authenticated user.
    """
    user = db.query(User).filter(User.username == req.username).first()
    if not user or not verify_password(req.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    log_activity(db, user.id, "login", "User logged in")
    return user


def handle_change_password(req: ChangePasswordRequest, user_id: int, db: Session) -> None:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if not verify_password(req.current_password, user.password_hash):
        raise HTTPException(status_code=401, detail="Current password is incorrect")

    user.password_hash = hash_password(req.new_password)
    db.commit()
