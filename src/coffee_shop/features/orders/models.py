from enum import Enum

from tortoise import fields, models

from ...common.models import TimestampMixin, generate_ksuid


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Order(TimestampMixin):
    id = fields.CharField(max_length=27, primary_key=True, default=generate_ksuid)
    total_amount = fields.FloatField(description="Caller supplied total, not derived from prices")
    status = fields.CharEnumField(OrderStatus, max_length=20, default=OrderStatus.PENDING)

    user: fields.ForeignKeyRelation["coffee_shop.features.users.models.User"] = fields.ForeignKeyField(
        "models.User", related_name="orders", on_delete=fields.CASCADE
    )

    items: fields.ReverseRelation["OrderItem"]

    def __str__(self):
        return f"Order {self.id} - Status: {self.status.value}"

    class Meta:
        table = "orders"
        ordering = ["created_at"]


class OrderItem(models.Model):
    """One product line of an order; the same product may appear on several lines."""

    id = fields.IntField(primary_key=True)
    order: fields.ForeignKeyRelation[Order] = fields.ForeignKeyField(
        "models.Order",
        related_name="items",
        on_delete=fields.CASCADE,
    )
    product: fields.ForeignKeyRelation["coffee_shop.features.products.models.Product"] = fields.ForeignKeyField(
        "models.Product",
        related_name="order_items",
        on_delete=fields.CASCADE,
    )

    def __str__(self):
        return f"Product {self.product_id} on Order {self.order_id}"

    class Meta:
        table = "order_items"
        ordering = ["id"]
