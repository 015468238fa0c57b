"""Category endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_category_service
from ..schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from ..services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate, service: CategoryService = Depends(get_category_service)
):
    return service.create(payload)


@router.get("", response_model=List[CategoryResponse])
def list_categories(service: CategoryService = Depends(get_category_service)):
    return service.list_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    return service.get(category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    return service.update(category_id, payload)


@router.delete("/{category_id}", response_model=CategoryResponse)
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    return service.delete(category_id)
