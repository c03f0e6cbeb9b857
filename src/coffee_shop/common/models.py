"""Models module for the coffee shop.

This module contains the common database building blocks for the application.
It includes a TimestampMixin class that provides created_at and updated_at
fields for models, as well as a utility function for generating KSUIDs
(K-Sortable Unique IDentifiers), which are used as opaque order identifiers."""

from tortoise import fields, models
from ksuid import ksuid

# Range of the INTEGER primary keys used by users and products
MIN_INT_ID = -(2**31)
MAX_INT_ID = 2**31 - 1


def is_int_id(value: int) -> bool:
    """True when ``value`` fits an ``IntField`` primary key."""
    return MIN_INT_ID <= value <= MAX_INT_ID


def generate_ksuid():
    """Generate a K-Sortable Unique IDentifier (KSUID).

    KSUIDs are time-ordered, URL-safe identifiers with a timestamp prefix,
    so orders created later also sort later.

    Returns:
        str: A 27 character string representation of the generated KSUID.
    """
    return str(ksuid.Ksuid())


class TimestampMixin(models.Model):
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True
