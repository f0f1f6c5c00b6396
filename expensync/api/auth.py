"""
Authentication API endpoints.

Signup, login, refresh-token exchange, logout and current-user lookup.
Login issues an access/refresh token pair; refresh mints a new access token
without re-authentication.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.db.repositories import tokens as token_repo
from expensync.db.repositories import users as users_repo
from expensync.utils.access_tokens import create_access_token
from expensync.utils.settings import get_auth_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: schemas.SignupRequest, db: Session = Depends(get_db)):
    if users_repo.get_user_by_email(db, payload.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
    user = users_repo.create_user(db, name=payload.name, email=payload.email, password=payload.password)
    logger.info("user_signup: user_id=%s", user.id)
    return {"message": "User registered successfully", "user": user}


@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    email = schemas.normalize_email(payload.email)
    user = users_repo.authenticate(db, email=email, password=payload.password) if email else None
    if not user:
        logger.info("login_failed")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    settings = get_auth_settings()
    _rt, refresh_token = token_repo.issue_refresh_token(
        db, user_id=user.id, ttl_days=settings.refresh_token_ttl_days
    )
    logger.info("login_succeeded: user_id=%s", user.id)
    return {
        "access_token": create_access_token(user.id, settings=settings),
        "refresh_token": refresh_token,
        "user": user,
    }


@router.post("/refresh-token", response_model=schemas.AccessTokenResponse)
def refresh_token(payload: schemas.RefreshRequest, db: Session = Depends(get_db)):
    if not payload.refresh_token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Refresh token required")
    rt = token_repo.resolve_active(db, token=payload.refresh_token)
    if not rt:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    user = users_repo.get_user(db, rt.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token user")
    token_repo.mark_used_now(db, rt=rt)
    logger.info("access_token_refreshed: user_id=%s token_id=%s", user.id, rt.token_id)
    return {"access_token": create_access_token(user.id)}


@router.post("/logout", response_model=schemas.MessageResponse)
def logout(payload: schemas.RefreshRequest, db: Session = Depends(get_db)):
    # Same answer whether or not the token matched
    if payload.refresh_token and token_repo.revoke(db, token=payload.refresh_token):
        logger.info("refresh_token_revoked")
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=schemas.User)
def me(user: models.User = Depends(get_current_user)):
    return user
