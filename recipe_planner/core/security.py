# recipe_planner/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional
import re

import jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from .config import settings
from .db import get_session
from .errors import Unauthenticated
from ..models import User

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except Exception:
        # Unknown or corrupt hash
        return False

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def password_issues(pw: str) -> list[str]:
    pw = pw or ""
    issues: list[str] = []
    if len(pw) < settings.PASSWORD_MIN_LENGTH:
        issues.append(f"At least {settings.PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"\d", pw):
        issues.append("Contains a number")
    if not re.search(r"[a-z]", pw):
        issues.append("Contains a lowercase letter")
    if not re.search(r"[A-Z]", pw):
        issues.append("Contains an uppercase letter")
    return issues

# Bearer tokens are optional; the session cookie is tried first
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)

def create_access_token(sub: str) -> str:
    """
    Create a JWT with subject (user id). Tokens expire according to
    ACCESS_TOKEN_EXPIRE_MINUTES in settings.
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": sub,     # user id as string
        "exp": expire,  # expiry time
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def _user_id_from_token(token: Optional[str]) -> Optional[int]:
    if not token:
        return None
    try:
        data = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return int(data["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        return None

def current_user_id(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[int]:
    """Resolve the caller from the session cookie, then from a bearer token."""
    uid = request.session.get("user_id")
    if uid:
        return int(uid)
    return _user_id_from_token(token)

def require_user_id(uid: Optional[int] = Depends(current_user_id)) -> int:
    # The identity is trusted once issued; bans are enforced at login.
    if uid is None:
        raise Unauthenticated()
    return uid

def get_current_user(
    uid: int = Depends(require_user_id),
    session: Session = Depends(get_session),
) -> User:
    user = session.get(User, uid)
    if not user:
        raise Unauthenticated("Invalid session")
    return user
