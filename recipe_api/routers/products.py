"""Product catalogue endpoints."""

from fastapi import APIRouter, Depends, status

from ..dependencies import PageParams, get_page_params, get_product_service
from ..schemas.common import Paginated
from ..schemas.product import ProductCreate, ProductResponse, ProductUpdate
from ..services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    return service.create(payload)


@router.get("", response_model=Paginated[ProductResponse])
def list_products(
    paging: PageParams = Depends(get_page_params),
    service: ProductService = Depends(get_product_service),
):
    return service.list_products(paging.page, paging.page_size)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return service.get(product_id)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    return service.update(product_id, payload)


@router.delete("/{product_id}", response_model=ProductResponse)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return service.delete(product_id)
