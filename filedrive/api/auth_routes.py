"""Authentication API endpoints.

Public endpoints:
    POST /api/auth/signup  -- create account, returns token + user
    POST /api/auth/login   -- authenticate, returns token + user

Authenticated:
    GET  /api/auth/me      -- current user
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, issue_token, require_auth
from ..database import get_db
from ..exceptions import UnauthorizedError
from ..schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserResponse
from ..services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=201,
    summary="Create an account and receive a bearer token",
)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    user = auth_service.signup(db, body.email, body.password, body.name)
    return AuthResponse(token=issue_token(user.user_id), user=UserResponse.from_model(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate and receive a bearer token",
)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, body.email, body.password)
    return AuthResponse(token=issue_token(user.user_id), user=UserResponse.from_model(user))


@router.get("/me", response_model=UserResponse, summary="Current user")
def get_me(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    user = auth_service.get_user_by_id(db, auth.user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return UserResponse.from_model(user)
