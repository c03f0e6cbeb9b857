import logging
from collections import Counter
from typing import List

from fastapi import HTTPException, status
from tortoise.transactions import in_transaction

from ...common.models import is_int_id
from .models import Product
from .schemas import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)


def _product_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


async def _get_product_or_404(product_id: int) -> Product:
    product = await Product.get_or_none(id=product_id) if is_int_id(product_id) else None
    if not product:
        raise _product_not_found()
    return product


async def create_products(products_in: List[ProductCreate]) -> List[ProductResponse]:
    """
    Creates a batch of products, all or nothing.

    Args:
        products_in: The products to create.

    Returns:
        The created products.

    Raises:
        HTTPException: 400 if the batch is empty, repeats a name, or uses a
            name that already exists.
    """
    if not products_in:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No products supplied")

    name_counts = Counter(product.name for product in products_in)
    duplicate_names = [name for name, count in name_counts.items() if count > 1]
    if duplicate_names:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Duplicate product names in request: {', '.join(duplicate_names)}",
        )

    existing_names = await Product.filter(name__in=list(name_counts)).values_list("name", flat=True)
    if existing_names:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Product(s) already exist: {', '.join(existing_names)}",
        )

    try:
        async with in_transaction() as conn:
            created = [
                await Product.create(**product_in.model_dump(), using_db=conn)
                for product_in in products_in
            ]
    except Exception as e:
        logger.error(f"Error creating products: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating products: {e}",
        )
    logger.info(f"Created {len(created)} product(s)")
    return [ProductResponse.model_validate(product) for product in created]


async def get_all_products() -> List[ProductResponse]:
    products = await Product.all().order_by("id")
    return [ProductResponse.model_validate(product) for product in products]


async def get_product(product_id: int) -> ProductResponse:
    product = await _get_product_or_404(product_id)
    return ProductResponse.model_validate(product)


async def update_product(product_id: int, product_in: ProductUpdate) -> ProductResponse:
    """
    Updates the mutable fields of a product.

    Args:
        product_id: The identifier of the product to update.
        product_in: The fields to overwrite; unset fields are left untouched.

    Returns:
        The updated product.
    """
    product = await _get_product_or_404(product_id)

    update_data = product_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )

    for key, value in update_data.items():
        setattr(product, key, value)
    try:
        await product.save()
    except Exception as e:
        logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating product: {e}",
        )
    return ProductResponse.model_validate(product)


async def delete_product(product_id: int) -> None:
    product = await _get_product_or_404(product_id)
    await product.delete()
    logger.info(f"Deleted product {product.name}")
