"""Recipe endpoints."""

from fastapi import APIRouter, Depends, status

from ..dependencies import PageParams, get_current_user, get_page_params, get_recipe_service
from ..models import User
from ..schemas.common import Paginated
from ..schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate
from ..services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    user: User = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
):
    """Create a recipe with its ingredients and steps in one transaction."""
    return service.create(payload, user.id)


@router.get("", response_model=Paginated[RecipeResponse])
def list_recipes(
    paging: PageParams = Depends(get_page_params),
    service: RecipeService = Depends(get_recipe_service),
):
    return service.list_recipes(paging.page, paging.page_size)


@router.get("/slug/{slug}", response_model=RecipeResponse)
def get_recipe_by_slug(slug: str, service: RecipeService = Depends(get_recipe_service)):
    return service.get_by_slug(slug)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: int, service: RecipeService = Depends(get_recipe_service)):
    return service.get(recipe_id)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: int,
    payload: RecipeUpdate,
    user: User = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
):
    return service.update(recipe_id, payload, user)


@router.delete("/{recipe_id}", response_model=RecipeResponse)
def delete_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    service: RecipeService = Depends(get_recipe_service),
):
    return service.delete(recipe_id, user)
