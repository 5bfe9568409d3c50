"""
Authentication router.
Handles registration, login and the current account.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import client_ip, current_account
from rest_api.services.domain import AccountService
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.schemas import (
    AccountEnvelope,
    AccountOutput,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.register_rate_limit)
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Create a restaurant account and return a bearer token.

    New accounts start on the free plan with a trial expiry.
    """
    return AccountService(db).register(body.model_dump(), ip_address=client_ip(request))


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Authenticate with email and password.

    Unknown email and wrong password get the same 400 response.
    """
    return AccountService(db).login(body.email, body.password, ip_address=client_ip(request))


@router.get("/me", response_model=AccountEnvelope)
def me(account: User = Depends(current_account)) -> AccountEnvelope:
    return AccountEnvelope(user=AccountOutput.model_validate(account))
