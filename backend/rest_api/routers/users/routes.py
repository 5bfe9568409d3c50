"""
Users router.
Profile and password of the signed-in account.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import client_ip, current_account
from rest_api.services.domain import AccountService
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    AccountEnvelope,
    AccountOutput,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
)


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=AccountEnvelope)
def get_profile(account: User = Depends(current_account)) -> AccountEnvelope:
    return AccountEnvelope(user=AccountOutput.model_validate(account))


@router.put("/profile", response_model=AccountEnvelope)
def update_profile(
    body: ProfileUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> AccountEnvelope:
    """Update name, restaurant name, phone or address. Omitted fields are kept."""
    user = AccountService(db).update_profile(account, body.model_dump(exclude_unset=True))
    return AccountEnvelope(user=user)


@router.put("/password", response_model=MessageResponse)
def change_password(
    request: Request,
    body: PasswordChange,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    AccountService(db).change_password(
        account, body.current_password, body.new_password, ip_address=client_ip(request)
    )
    return MessageResponse(message="Password updated successfully")
