from pydantic import Field, EmailStr
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel
from .models import OrderStatus


class OrderCreateSchema(CamelModel):
    customer_email: EmailStr = Field(..., description="Email of the customer placing the order")
    order_items: List[str] = Field(..., min_length=1, description="Product ids as strings")
    total_amount: float = Field(..., gt=0, description="Total amount, greater than 0")


class OrderUpdateSchema(CamelModel):
    order_status: OrderStatus = Field(..., description="New status of the order")
    order_items: Optional[List[str]] = Field(
        None, description="Replacement product ids; omit to keep the current products"
    )


class OrderIdSchema(CamelModel):
    order_id: str = Field(..., description="Opaque order identifier")


class OrderSummarySchema(OrderIdSchema):
    customer_email: str


class OrderListSchema(CamelModel):
    orders: List[OrderIdSchema]


class OrderSummaryListSchema(CamelModel):
    orders: List[OrderSummarySchema]


class OrderPublicSchema(OrderSummarySchema):
    products: List[str] = Field(..., description="Product names, one per order line")
    total_amount: float
    status: OrderStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime
