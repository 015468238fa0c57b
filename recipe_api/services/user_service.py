"""User CRUD with paginated listing."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..database import unit_of_work
from ..errors import BadRequestError, ForbiddenError, NotFoundError
from ..mappers import user_to_response
from ..models import Role, User
from ..pagination import create_paginated, page_offset
from ..schemas.common import Paginated
from ..schemas.user import UserCreate, UserResponse, UserUpdate
from ..security import hash_password

logger = logging.getLogger(__name__)


class UserService:
    """User operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == email.strip().lower()))

    def _get_or_404(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _check_role_assignment(actor: User | None) -> None:
        if actor is None or actor.role != Role.ADMIN:
            raise ForbiddenError("Only admins can assign roles")

    def create(self, payload: UserCreate, actor: User | None = None) -> UserResponse:
        if payload.role != Role.USER:
            self._check_role_assignment(actor)
        with unit_of_work(self.db):
            if self.get_by_email(payload.email):
                raise BadRequestError("User already exists")
            user = User(
                name=payload.name,
                email=payload.email.strip().lower(),
                password=hash_password(payload.password),
                role=payload.role,
            )
            self.db.add(user)
            self.db.flush()
            response = user_to_response(user)

        logger.info(f"Created user id={response.id}")
        return response

    def list_users(self, page: int, page_size: int) -> Paginated[UserResponse]:
        """Newest users first."""
        offset = page_offset(page, page_size)
        users = self.db.scalars(
            select(User)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(offset)
            .limit(page_size)
        ).all()
        total = self.db.scalar(select(func.count()).select_from(User))
        return create_paginated(
            [user_to_response(u) for u in users], total, page, page_size
        )

    def get(self, user_id: int) -> UserResponse:
        return user_to_response(self._get_or_404(user_id))

    def update(
        self, user_id: int, payload: UserUpdate, actor: User | None = None
    ) -> UserResponse:
        with unit_of_work(self.db):
            user = self._get_or_404(user_id)
            changes = payload.model_dump(exclude_unset=True)
            if changes.get("role") is not None:
                self._check_role_assignment(actor)

            if changes.get("email") is not None:
                email = changes["email"].strip().lower()
                existing = self.get_by_email(email)
                if existing is not None and existing.id != user.id:
                    raise BadRequestError("User already exists")
                changes["email"] = email
            if changes.get("password") is not None:
                changes["password"] = hash_password(changes["password"])

            for field, value in changes.items():
                if value is None:
                    continue  # Required columns cannot be cleared
                setattr(user, field, value)
            self.db.flush()
            response = user_to_response(user)

        logger.info(f"Updated user id={user_id}")
        return response

    def delete(self, user_id: int) -> UserResponse:
        with unit_of_work(self.db):
            user = self._get_or_404(user_id)
            response = user_to_response(user)
            self.db.delete(user)

        logger.info(f"Deleted user id={user_id}")
        return response
