"""User endpoints."""

from fastapi import APIRouter, Depends, status

from ..dependencies import PageParams, get_optional_user, get_page_params, get_user_service
from ..models import User
from ..schemas.common import Paginated
from ..schemas.user import UserCreate, UserResponse, UserUpdate
from ..services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    actor: User | None = Depends(get_optional_user),
    service: UserService = Depends(get_user_service),
):
    """Create a user. Assigning a role other than USER needs an ADMIN bearer."""
    return service.create(payload, actor)


@router.get("", response_model=Paginated[UserResponse])
def list_users(
    paging: PageParams = Depends(get_page_params),
    service: UserService = Depends(get_user_service),
):
    """Users, newest first."""
    return service.list_users(paging.page, paging.page_size)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    actor: User | None = Depends(get_optional_user),
    service: UserService = Depends(get_user_service),
):
    return service.update(user_id, payload, actor)


@router.delete("/{user_id}", response_model=UserResponse)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.delete(user_id)
