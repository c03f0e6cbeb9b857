from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    SUPER = "SUPER"


ALL_ROLES = frozenset({Role.USER, Role.ADMIN, Role.SUPER})
ELEVATED_ROLES = frozenset({Role.ADMIN, Role.SUPER})


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    hashed_password = fields.CharField(max_length=255)
    username = fields.CharField(max_length=100, unique=True, null=True)
    phone = fields.CharField(max_length=50, unique=True, null=True)
    address = fields.CharField(max_length=255, null=True)
    city = fields.CharField(max_length=100, null=True)
    avatar = fields.CharField(max_length=500, null=True)
    role = fields.CharEnumField(Role, max_length=10, default=Role.USER)

    orders: fields.ReverseRelation["coffee_shop.features.orders.models.Order"]

    def __str__(self):
        return f"{self.email} ({self.role.value})"

    class Meta:
        table = "users"
