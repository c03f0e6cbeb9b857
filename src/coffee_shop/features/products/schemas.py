from typing import List, Optional
import datetime

from pydantic import Field

from ...common.schemas import CamelModel
from .models import ProductCategory

MAX_PRICE = 99.99


class ProductBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Unique product name")
    description: str = Field(..., min_length=1, description="Product description")
    price: float = Field(..., gt=0, le=MAX_PRICE, description="Price, greater than 0 and at most 99.99")
    category: ProductCategory = Field(..., description="Product category")
    images: List[str] = Field(default_factory=list, description="Image URLs")
    is_best_seller: bool = Field(default=False)
    is_recommended: bool = Field(default=False)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    description: Optional[str] = Field(None, min_length=1, description="New description")
    price: Optional[float] = Field(None, gt=0, le=MAX_PRICE, description="New price")
    images: Optional[List[str]] = Field(None, description="New image URLs")
    is_best_seller: Optional[bool] = None
    is_recommended: Optional[bool] = None


class ProductResponse(ProductBase):
    id: int = Field(..., description="Product identifier")
    created_at: datetime.datetime = Field(..., description="Timestamp of when the product was created")
    updated_at: datetime.datetime = Field(..., description="Timestamp of when the product was last updated")
