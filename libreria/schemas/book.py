from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class BookRequest(BaseModel):
    external_id: int = Field(gt=0)
    title: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(ge=0)
    available_quantity: int | None = Field(default=None, ge=0)


class BookUpdateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(ge=0)


class BookResponse(BaseModel):
    id: int
    external_id: int
    title: str
    price: Decimal
    stock_quantity: int
    available_quantity: int
    created_at: datetime

    model_config = {"from_attributes": True}
