from fastapi import APIRouter, Depends, Query, Response, status
from typing import Optional, Annotated

from ...common.schemas import GeneralResponse, envelope

# Schemas from this feature
from .schemas import OrderCreateSchema, OrderUpdateSchema

# Service imports
from .service import (
    _to_order_public_schema, create_new_order, get_my_orders, get_all_orders,
    get_order_by_id, delete_existing_order, update_existing_order
)

# Auth context, resolved by the auth middleware
from ..auth.gate import AuthContext
from ..auth.middleware import get_auth_context

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
)

@router.post("", response_model=GeneralResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreateSchema,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
):
    new_order = await create_new_order(order_data, ctx)
    return envelope(status.HTTP_201_CREATED, "Order created successfully", _to_order_public_schema(new_order))


# Declared before "/{order_id}" so "history" is not taken for an id
@router.get("/history", response_model=GeneralResponse)
async def get_order_history(ctx: Annotated[AuthContext, Depends(get_auth_context)]):
    orders = await get_my_orders(ctx)
    return envelope(status.HTTP_200_OK, "Orders retrieved successfully", orders)


@router.get("", response_model=GeneralResponse)
async def list_orders(
    size: int = Query(10, description="Maximum number of orders, 0 or less for all"),
    email: Optional[str] = Query(None, description="Only orders of this customer"),
):
    orders = await get_all_orders(size, email)
    return envelope(status.HTTP_200_OK, "Orders retrieved successfully", orders)


@router.get("/{order_id}", response_model=GeneralResponse)
async def get_order(
    order_id: str,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
):
    order = await get_order_by_id(order_id, ctx)
    return envelope(status.HTTP_200_OK, "Order retrieved successfully", _to_order_public_schema(order))


@router.patch("/{order_id}", response_model=GeneralResponse)
async def update_order(order_id: str, update_data: OrderUpdateSchema):
    updated_order = await update_existing_order(order_id, update_data)
    return envelope(status.HTTP_200_OK, "Order updated successfully", _to_order_public_schema(updated_order))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_order(order_id: str):
    await delete_existing_order(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
