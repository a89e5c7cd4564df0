"""Auth API: login, account creation, current user, logout. Identity lives in the session cookie."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from shiurbank.api.dependencies import (
    get_account_service,
    get_catalog_service,
    get_optional_session_user,
    login_session,
    logout_session,
)
from shiurbank.application.dtos.user import SessionUser
from shiurbank.application.use_cases import AccountService, CatalogService
from shiurbank.schemas.auth import (
    CreateAccountRequest,
    CurrentUserResponse,
    InstitutionItem,
    InstitutionListResponse,
    LoginRequest,
    LoginResponse,
)
from shiurbank.schemas.base import MessageResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    body: LoginRequest,
    account_svc: Annotated[AccountService, Depends(get_account_service)],
):
    user = await account_svc.login(body.username, body.password)
    login_session(request, user)
    return LoginResponse(username=user.username)


@router.post("/create-account", response_model=LoginResponse)
async def create_account(
    request: Request,
    body: CreateAccountRequest,
    account_svc: Annotated[AccountService, Depends(get_account_service)],
):
    """Register and log in. Field errors come back as errors{field: message}."""
    user = await account_svc.create_account(
        username=body.username,
        password=body.password,
        title=body.title,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        institution_ids=body.institutions,
    )
    login_session(request, user)
    return LoginResponse(username=user.username)


@router.get("/institutions", response_model=InstitutionListResponse)
async def list_institutions(
    catalog_svc: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Public: the registration form needs it before login."""
    institutions = await catalog_svc.list_institutions()
    return InstitutionListResponse(
        institutions=[InstitutionItem.from_result(i) for i in institutions]
    )


@router.get("/current-user", response_model=CurrentUserResponse)
def current_user(
    user: Annotated[SessionUser | None, Depends(get_optional_session_user)],
):
    if user is None:
        return CurrentUserResponse(logged_in=False)
    return CurrentUserResponse(logged_in=True, username=user.username)


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    logout_session(request)
    return MessageResponse(message="Logged out successfully")
