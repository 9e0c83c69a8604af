import logging
from time import time as _now

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlmodel import Session, select

from recipe_planner.core.config import settings
from recipe_planner.core.db import get_session
from recipe_planner.core.errors import Conflict, Forbidden, Unauthenticated
from recipe_planner.core.security import (
    create_access_token,
    get_current_user,
    hash_password,
    password_issues,
    verify_password,
)
from recipe_planner.models import User

log = logging.getLogger(__name__)

router = APIRouter()

class SignupIn(BaseModel):
    email: EmailStr
    display_name: str = Field(min_length=1, max_length=120, alias="displayName")
    password: str

    model_config = {"populate_by_name": True}

    @field_validator('password')
    @classmethod
    def _strong_pw(cls, v: str):
        issues = password_issues(v)
        if issues:
            raise ValueError('weak_password: ' + '; '.join(issues))
        return v

class LoginIn(BaseModel):
    email: EmailStr
    password: str

def _authenticate(session: Session, email: str, password: str) -> User:
    u = session.exec(select(User).where(User.email == email)).first()
    if not u or not verify_password(password, u.password_hash):
        raise Unauthenticated("Invalid credentials")
    if u.is_banned:
        log.info("login refused for banned user %s", u.id)
        raise Forbidden("Your account has been banned")
    return u

def _start_session(request: Request, u: User) -> None:
    request.session['user_id'] = u.id
    request.session['started_at'] = int(_now())

@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, request: Request, session: Session = Depends(get_session)):
    existing = session.exec(select(User).where(User.email == str(payload.email))).first()
    if existing:
        raise Conflict("Email already registered")
    u = User(
        email=str(payload.email),
        display_name=payload.display_name.strip(),
        password_hash=hash_password(payload.password),
        role="user",
    )
    session.add(u)
    session.commit()
    session.refresh(u)
    # Auto-login via session cookie
    _start_session(request, u)
    log.info("registered user %s", u.id)
    return {"id": u.id, "email": u.email, "displayName": u.display_name}

@router.post("/login")
def login(payload: LoginIn, request: Request, session: Session = Depends(get_session)):
    u = _authenticate(session, str(payload.email), payload.password)
    _start_session(request, u)
    return {"ok": True}

@router.post("/token")
def issue_token(
    form: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    # OAuth2 password flow (form fields), so the docs "Authorize" button works;
    # the email goes in the username field
    u = _authenticate(session, form.username.strip(), form.password)
    return {"access_token": create_access_token(str(u.id)), "token_type": "bearer"}

@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"ok": True}

@router.get("/me")
def me(request: Request, user: User = Depends(get_current_user)):
    started = int(request.session.get('started_at') or int(_now()))
    remaining = max(0, started + settings.SESSION_MAX_AGE - int(_now()))
    return {
        "id": user.id,
        "email": user.email,
        "displayName": user.display_name,
        "role": user.role,
        "createdAt": user.created_at.isoformat(),
        "remainingSeconds": remaining,
    }

def seed_admin(session: Session) -> None:
    """Create the configured administrator account if it does not exist yet."""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return
    existing = session.exec(select(User).where(User.email == settings.ADMIN_EMAIL)).first()
    if existing:
        if existing.role != "admin":
            existing.role = "admin"
            session.add(existing)
            session.commit()
            log.info("promoted %s to admin", settings.ADMIN_EMAIL)
        return
    session.add(User(
        email=settings.ADMIN_EMAIL,
        display_name=settings.ADMIN_DISPLAY_NAME,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        role="admin",
    ))
    session.commit()
    log.info("seeded admin account %s", settings.ADMIN_EMAIL)
