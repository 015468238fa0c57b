"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_auth_service, get_current_user
from ..models import User
from ..schemas.auth import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    LogoutRequest,
    MeResponse,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenPair,
    VerifyEmailRequest,
)
from ..schemas.common import MessageResponse
from ..services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenPair)
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(payload)


@router.post("/register", response_model=TokenPair, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(payload)


@router.post("/logout", response_model=MessageResponse)
def logout(payload: LogoutRequest, service: AuthService = Depends(get_auth_service)):
    return service.logout(payload.refresh_token)


@router.post("/refresh", response_model=TokenPair)
def refresh(payload: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    return service.refresh(payload.refresh_token)


@router.post("/me", response_model=MeResponse)
def me(
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.me(user)


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(payload: EmailRequest, service: AuthService = Depends(get_auth_service)):
    return service.forgot_password(payload.email)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    payload: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)
):
    return service.reset_password(payload)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.change_password(user, payload)


@router.post("/send-verification-email", response_model=MessageResponse)
def send_verification_email(
    payload: EmailRequest, service: AuthService = Depends(get_auth_service)
):
    return service.send_verification_email(payload.email)


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(payload: VerifyEmailRequest, service: AuthService = Depends(get_auth_service)):
    return service.verify_email(payload.code)
