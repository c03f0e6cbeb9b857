# External dependencies
import logging
import re
from tortoise.transactions import in_transaction
from fastapi import HTTPException, status

# Typing
from typing import List, Optional

# Models from this feature and related features
from ...common.models import is_int_id
from .models import Order, OrderItem, OrderStatus
from ..products.models import Product
from ..users.models import User

# Schemas from this feature
from .schemas import (
    OrderCreateSchema, OrderUpdateSchema, OrderPublicSchema,
    OrderIdSchema, OrderSummarySchema, OrderListSchema, OrderSummaryListSchema
)
from ..auth.gate import AuthContext

logger = logging.getLogger(__name__)

NO_VALID_PRODUCTS = "No valid products found for the given IDs"

# Optional sign followed by ASCII digits only, no blanks or underscores
PRODUCT_REF_PATTERN = re.compile(r"[+-]?[0-9]+")


def _order_not_found(order_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Order with ID {order_id} not found")


async def resolve_products(product_refs: List[str]) -> List[Product]:
    """Looks up every product reference on its own.

    References that are not plain integers, fall outside the product id
    range, or point at no product are dropped. Repeated references yield
    repeated products.
    """
    products = []
    for ref in product_refs:
        if not isinstance(ref, str) or not PRODUCT_REF_PATTERN.fullmatch(ref):
            logger.debug(f"Dropping unparseable product reference {ref!r}")
            continue
        product_id = int(ref)
        if not is_int_id(product_id):
            logger.debug(f"Dropping out of range product reference {ref!r}")
            continue
        product = await Product.get_or_none(id=product_id)
        if product is None:
            logger.debug(f"Dropping unknown product reference {ref!r}")
            continue
        products.append(product)
    return products


async def _load_order(order_id: str) -> Optional[Order]:
    return await Order.get_or_none(id=order_id).prefetch_related("user", "items__product")


async def create_new_order(order_data: OrderCreateSchema, ctx: AuthContext) -> Order:
    user = await User.get_or_none(email=order_data.customer_email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"User with email {order_data.customer_email} not found",
        )
    if ctx.email != user.email:
        logger.warning(f"{ctx.email} is placing an order on behalf of {user.email}")

    products = await resolve_products(order_data.order_items)
    if not products:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_VALID_PRODUCTS)

    try:
        async with in_transaction() as conn:
            order = await Order.create(
                user=user, total_amount=order_data.total_amount,
                status=OrderStatus.PENDING, using_db=conn
            )
            for product in products:
                await OrderItem.create(order=order, product=product, using_db=conn)
    except Exception as e:
        logger.error(f"Error creating order: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating order: {e}",
        )

    logger.info(f"Order {order.id} placed for {user.email} with {len(products)} product(s)")
    return await _load_order(order.id)


async def get_my_orders(ctx: AuthContext) -> OrderListSchema:
    user = await User.get_or_none(email=ctx.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User with email {ctx.email} not found")

    order_ids = await Order.filter(user_id=user.id).values_list("id", flat=True)
    if not order_ids:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No orders found for user with email {ctx.email}",
        )
    return OrderListSchema(orders=[OrderIdSchema(order_id=order_id) for order_id in order_ids])


async def get_all_orders(size: int, email: Optional[str]) -> OrderSummaryListSchema:
    """Lists orders, optionally for one customer, keeping at most ``size``.

    A ``size`` of zero or less means no limit.
    """
    query = Order.all().prefetch_related("user")
    if email is not None:
        query = query.filter(user__email=email)
    if size > 0:
        query = query.limit(size)

    orders = await query
    if not orders:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No orders found")
    return OrderSummaryListSchema(
        orders=[OrderSummarySchema(order_id=order.id, customer_email=order.user.email) for order in orders]
    )


async def get_order_by_id(order_id: str, ctx: AuthContext) -> Order:
    if not await User.filter(email=ctx.email).exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User with email {ctx.email} not found")

    order = await _load_order(order_id)

    # Authorization check: ADMIN and SUPER can see any order, USERs only their own.
    if not ctx.is_elevated and (order is None or order.user.email != ctx.email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to access this order")

    if order is None:
        raise _order_not_found(order_id)
    return order


async def delete_existing_order(order_id: str) -> None:
    order = await Order.get_or_none(id=order_id)
    if not order:
        raise _order_not_found(order_id)
    async with in_transaction() as conn:
        await OrderItem.filter(order_id=order.id).using_db(conn).delete()
        await order.delete(using_db=conn)
    logger.info(f"Order {order_id} deleted")


async def update_existing_order(order_id: str, update_data: OrderUpdateSchema) -> Order:
    """Overwrites the status and, when given, the products of an order.

    Any status may follow any other. Omitting ``order_items`` keeps the
    current products; supplying them replaces every line.
    """
    order = await Order.get_or_none(id=order_id)
    if not order:
        raise _order_not_found(order_id)

    products = None
    if update_data.order_items is not None:
        products = await resolve_products(update_data.order_items)
        if not products:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_VALID_PRODUCTS)

    previous_status = order.status
    try:
        async with in_transaction() as conn:
            order.status = update_data.order_status
            await order.save(using_db=conn)
            if products is not None:
                await OrderItem.filter(order_id=order.id).using_db(conn).delete()
                for product in products:
                    await OrderItem.create(order=order, product=product, using_db=conn)
    except Exception as e:
        logger.error(f"Error updating order {order_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating order: {e}",
        )

    logger.debug(f"Order {order_id} moved from {previous_status.value} to {order.status.value}")
    return await _load_order(order.id)


def _to_order_public_schema(order: Order) -> OrderPublicSchema:
    # Ensure related fields are prefetched before calling this
    return OrderPublicSchema(
        order_id=order.id,
        customer_email=order.user.email,
        products=[item.product.name for item in order.items],
        total_amount=order.total_amount,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
