"""API routes for the product catalog."""
from typing import List

from fastapi import APIRouter, status

from ...common.schemas import GeneralResponse, envelope
from . import service
from .schemas import ProductCreate, ProductUpdate

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "",
    response_model=GeneralResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a batch of products",
)
async def create_products(products_in: List[ProductCreate]):
    products = await service.create_products(products_in)
    return envelope(status.HTTP_201_CREATED, "Products created successfully", products)


@router.get("", response_model=GeneralResponse, summary="List all products")
async def get_all_products():
    products = await service.get_all_products()
    return envelope(status.HTTP_200_OK, "Products retrieved successfully", products)


@router.get("/{product_id}", response_model=GeneralResponse, summary="Get a specific product")
async def get_product(product_id: int):
    product = await service.get_product(product_id)
    return envelope(status.HTTP_200_OK, "Product retrieved successfully", product)


@router.patch("/{product_id}", response_model=GeneralResponse, summary="Update a product")
async def update_product(product_id: int, product_in: ProductUpdate):
    product = await service.update_product(product_id, product_in)
    return envelope(status.HTTP_200_OK, "Product updated successfully", product)


@router.delete("/{product_id}", response_model=GeneralResponse, summary="Delete a product")
async def delete_product(product_id: int):
    await service.delete_product(product_id)
    return envelope(status.HTTP_200_OK, "Product deleted successfully")
