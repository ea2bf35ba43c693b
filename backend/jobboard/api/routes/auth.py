"""
Authentication API endpoints.

Standalone auth service: register, login, profile fetch/update/delete,
logout and email verification. Errors are reported as ``{"msg": message}``.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from jobboard.api.deps import get_account_service, get_request_token, get_token_subject
from jobboard.api.schemas import AccountPublic, MessageResponse, UserSummary
from jobboard.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from jobboard.models import Role
from jobboard.services import AccountService

router = APIRouter()


# ============== Pydantic Schemas ==============


class UserRegister(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    """Partial profile update. Absent or empty fields are left unchanged."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    # Only applied to employer accounts
    organization_name: Optional[str] = None
    industry_type: Optional[str] = None
    total_employee: Optional[int] = None
    description: Optional[str] = None
    address: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = None
    created_org: Optional[str] = None


class EmailVerification(BaseModel):
    token: Optional[str] = None


class UserEnvelope(BaseModel):
    user: UserSummary


class LoginResponse(BaseModel):
    token: str
    user: UserSummary


class ProfileResponse(BaseModel):
    user: AccountPublic


# ============== API Endpoints ==============


@router.post("/register", response_model=UserEnvelope)
def register(
    payload: UserRegister,
    service: AccountService = Depends(get_account_service),
):
    """Register a job seeker with email, name and password."""
    if not (payload.email and payload.name and payload.password):
        raise ValidationError("Please enter all fields")

    try:
        account = service.register(
            {**payload.model_dump(), "role": Role.JOB_SEEKER.value}
        )
    except ConflictError as exc:
        raise ConflictError("User already exists") from exc

    return UserEnvelope(user=UserSummary.model_validate(account))


@router.post("/login", response_model=LoginResponse)
def login(
    payload: UserLogin,
    service: AccountService = Depends(get_account_service),
):
    """Login with email + password and receive a session token."""
    if not (payload.email and payload.password):
        raise ValidationError("Please enter all fields")

    try:
        token, account = service.login(payload.email, payload.password)
    except (NotFoundError, AuthenticationError) as exc:
        raise BadRequestError(exc.message) from exc

    return LoginResponse(token=token, user=UserSummary.model_validate(account))


@router.get("/user", response_model=ProfileResponse)
def get_user(
    account_id: Optional[int] = Depends(get_token_subject),
    service: AccountService = Depends(get_account_service),
):
    """Profile of the authenticated account."""
    try:
        account = service.get_account(account_id)
    except NotFoundError as exc:
        raise BadRequestError(exc.message) from exc

    return ProfileResponse(user=AccountPublic.model_validate(account))


@router.put("/user", response_model=UserEnvelope)
def update_user(
    payload: UserUpdate,
    account_id: Optional[int] = Depends(get_token_subject),
    service: AccountService = Depends(get_account_service),
):
    """Partially update the authenticated account."""
    account = service.update_account(account_id, payload.model_dump(exclude_none=True))
    return UserEnvelope(user=UserSummary.model_validate(account))


@router.delete("/user", response_model=MessageResponse)
def delete_user(
    account_id: Optional[int] = Depends(get_token_subject),
    service: AccountService = Depends(get_account_service),
):
    """Delete the authenticated account."""
    service.delete_account(account_id)
    return MessageResponse(msg="User deleted successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: Optional[str] = Depends(get_request_token),
    service: AccountService = Depends(get_account_service),
):
    """
    Logout.

    Sessions are stateless: the token is checked but not revoked, the client
    is expected to discard it.
    """
    service.logout(token)
    return MessageResponse(msg="Logged out successfully")


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(
    payload: EmailVerification,
    service: AccountService = Depends(get_account_service),
):
    """Confirm an email address with the token issued at registration."""
    service.verify_email(payload.token)
    return MessageResponse(msg="Email verified successfully")
