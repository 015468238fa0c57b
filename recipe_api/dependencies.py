"""FastAPI dependencies: services bound to the request session, auth, paging."""

from dataclasses import dataclass

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .database import get_db
from .errors import UnauthorizedError
from .models import User
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .services.auth_service import AuthService
from .services.category_service import CategoryService
from .services.order_service import OrderService
from .services.product_service import ProductService
from .services.recipe_service import RecipeService
from .services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class PageParams:
    page: int
    page_size: int


def get_page_params(
    page: int = Query(1, ge=1, description="The page number"),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize", description="The page size"
    ),
) -> PageParams:
    return PageParams(page=page, page_size=page_size)


def get_auth_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> AuthService:
    return AuthService(db, settings)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return auth_service.authenticate(credentials.credentials)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User | None:
    """The caller when a bearer token is sent, otherwise None."""
    if credentials is None:
        return None
    return auth_service.authenticate(credentials.credentials)


def get_recipe_service(db: Session = Depends(get_db)) -> RecipeService:
    return RecipeService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)
