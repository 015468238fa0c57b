"""
Authentication service for the recipe API.

Handles login and registration, access/refresh token issuing and rotation,
logout, and the password reset and email verification flows. Passwords are
stored as bcrypt hashes; refresh, reset and verification tokens are opaque
UUIDs of which only a SHA-256 digest is persisted.
"""

import logging
from datetime import timedelta
from typing import Callable, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import unit_of_work
from ..errors import ConflictError, UnauthorizedError
from ..models import Token, TokenType, User, utcnow
from ..schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    ResetPasswordRequest,
    TokenPair,
)
from ..schemas.common import MessageResponse
from ..security import (
    create_access_token,
    decode_access_token,
    generate_opaque_token,
    hash_password,
    hash_token,
    verify_password,
)

logger = logging.getLogger(__name__)

# Receives (user, token type, raw token) for delivery to the user
Notifier = Callable[[User, TokenType, str], None]


def log_notifier(user: User, token_type: TokenType, raw_token: str) -> None:
    """Default notifier: no mail transport is configured, so only record the event."""
    logger.info(f"{token_type.value} token issued for user id={user.id}")


class AuthService:
    """
    Authentication service handling all credential and token operations.
    """

    def __init__(self, db: Session, settings: Settings, notifier: Optional[Notifier] = None):
        self.db = db
        self.settings = settings
        self.notifier = notifier or log_notifier

    # Token helpers

    def _lifetime(self, token_type: TokenType) -> timedelta:
        if token_type == TokenType.REFRESH:
            return timedelta(days=self.settings.refresh_token_days)
        if token_type == TokenType.PASSWORD_RESET:
            return timedelta(minutes=self.settings.password_reset_minutes)
        return timedelta(hours=self.settings.email_verification_hours)

    def _store_token(self, user: User, token_type: TokenType) -> str:
        """Persist the digest of a new opaque token and return the raw value."""
        raw = generate_opaque_token()
        self.db.add(Token(
            user_id=user.id,
            type=token_type,
            token=hash_token(raw),
            expires_at=utcnow() + self._lifetime(token_type),
        ))
        return raw

    def _find_token(self, raw: str, token_type: TokenType) -> Token:
        token = self.db.scalar(
            select(Token).where(Token.token == hash_token(raw), Token.type == token_type)
        )
        if token is None or token.is_expired:
            raise UnauthorizedError(f"Invalid or expired {token_type.value.lower()} token")
        return token

    def _revoke_refresh_tokens(self, user: User) -> None:
        self.db.execute(
            delete(Token).where(Token.user_id == user.id, Token.type == TokenType.REFRESH)
        )

    def _issue_tokens(self, user: User) -> TokenPair:
        refresh_token = self._store_token(user, TokenType.REFRESH)
        access_token = create_access_token(
            user.id,
            self.settings.jwt_secret,
            self.settings.jwt_expires_minutes,
            self.settings.jwt_algorithm,
        )
        return TokenPair(token=access_token, refresh_token=refresh_token)

    def _get_user_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == email.strip().lower()))

    # User Registration and Authentication

    def register(self, payload: RegisterRequest) -> TokenPair:
        with unit_of_work(self.db):
            if self._get_user_by_email(payload.email):
                raise ConflictError("User already exists")
            user = User(
                name=payload.name,
                email=payload.email.strip().lower(),
                password=hash_password(payload.password),
            )
            self.db.add(user)
            self.db.flush()
            tokens = self._issue_tokens(user)

        logger.info(f"User registered successfully: id={user.id}")
        return tokens

    def login(self, payload: LoginRequest) -> TokenPair:
        """Verify credentials against the stored bcrypt hash and issue tokens."""
        with unit_of_work(self.db):
            user = self._get_user_by_email(payload.email)
            if user is None or not verify_password(payload.password, user.password):
                logger.warning("Failed login attempt")
                raise UnauthorizedError("Invalid credentials")
            tokens = self._issue_tokens(user)

        logger.info(f"User logged in: id={user.id}")
        return tokens

    def authenticate(self, access_token: str) -> User:
        """Resolve a bearer access token to its user."""
        user_id = decode_access_token(
            access_token, self.settings.jwt_secret, self.settings.jwt_algorithm
        )
        user = self.db.get(User, user_id) if user_id is not None else None
        if user is None:
            raise UnauthorizedError("Invalid or expired access token")
        return user

    def refresh(self, raw_refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new pair; the old one stops working."""
        with unit_of_work(self.db):
            token = self._find_token(raw_refresh_token, TokenType.REFRESH)
            user = token.user
            self.db.delete(token)
            tokens = self._issue_tokens(user)
        return tokens

    def logout(self, raw_refresh_token: str) -> MessageResponse:
        with unit_of_work(self.db):
            token = self._find_token(raw_refresh_token, TokenType.REFRESH)
            user_id = token.user_id
            self.db.delete(token)

        logger.info(f"User logged out: id={user_id}")
        return MessageResponse(message="Logout successful")

    def me(self, user: User) -> MeResponse:
        return MeResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            email_verified=user.email_verified,
        )

    # Password Management

    def change_password(self, user: User, payload: ChangePasswordRequest) -> MessageResponse:
        with unit_of_work(self.db):
            if not verify_password(payload.old_password, user.password):
                logger.warning(f"Failed password change for user id={user.id}")
                raise UnauthorizedError("Invalid credentials")
            user.password = hash_password(payload.new_password)
            self._revoke_refresh_tokens(user)

        logger.info(f"Password changed for user id={user.id}")
        return MessageResponse(message="Change password successful")

    def forgot_password(self, email: str) -> MessageResponse:
        """Issue a reset token if the account exists.

        The response is identical either way so it does not reveal which accounts exist.
        """
        user = self._get_user_by_email(email)
        if user is not None:
            with unit_of_work(self.db):
                raw = self._store_token(user, TokenType.PASSWORD_RESET)
            self.notifier(user, TokenType.PASSWORD_RESET, raw)
        return MessageResponse(message="If the account exists, a reset link has been sent")

    def reset_password(self, payload: ResetPasswordRequest) -> MessageResponse:
        with unit_of_work(self.db):
            token = self._find_token(payload.token, TokenType.PASSWORD_RESET)
            user = token.user
            user.password = hash_password(payload.password)
            self.db.delete(token)
            self._revoke_refresh_tokens(user)

        logger.info(f"Password reset for user id={user.id}")
        return MessageResponse(message="Reset password successful")

    # Email Verification

    def send_verification_email(self, email: str) -> MessageResponse:
        user = self._get_user_by_email(email)
        if user is not None and not user.email_verified:
            with unit_of_work(self.db):
                raw = self._store_token(user, TokenType.EMAIL_VERIFICATION)
            self.notifier(user, TokenType.EMAIL_VERIFICATION, raw)
        return MessageResponse(message="If the account exists, a verification email has been sent")

    def verify_email(self, code: str) -> MessageResponse:
        with unit_of_work(self.db):
            token = self._find_token(code, TokenType.EMAIL_VERIFICATION)
            token.user.email_verified = True
            self.db.delete(token)
        return MessageResponse(message="Email verified successfully")
