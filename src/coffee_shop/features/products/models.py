"""Data model for the product catalog."""

from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin


class ProductCategory(str, Enum):
    DRINK = "DRINK"
    FOOD = "FOOD"


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255, unique=True)
    description = fields.TextField()
    price = fields.FloatField(description="Unit price, 0 < price <= 99.99")
    category = fields.CharEnumField(ProductCategory, max_length=20)
    images = fields.JSONField(default=list)
    is_best_seller = fields.BooleanField(default=False)
    is_recommended = fields.BooleanField(default=False)

    order_items: fields.ReverseRelation["coffee_shop.features.orders.models.OrderItem"]

    def __str__(self):
        return f"{self.name} ({self.category.value}, ${self.price:.2f})"

    class Meta:
        table = "products"
