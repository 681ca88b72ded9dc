# shop/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List
from decimal import Decimal
from datetime import datetime

from shop.utils.security import MAX_PASSWORD_BYTES


class UserCreate(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    token: str


class UserRead(BaseModel):
    """Schema dla uzytkownika (response). Bez hasla i tokenu."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class ItemOut(BaseModel):
    id: int
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartLineIn(BaseModel):
    """Body POST /carts, przyjmuje itemID (jak stary klient) lub item_id."""

    item_id: int = Field(..., gt=0, alias="itemID")

    model_config = ConfigDict(populate_by_name=True)


class CartLineOut(BaseModel):
    id: int
    cart_id: int
    item_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: int
    user_id: int
    version: int
    lines: List[CartLineOut]

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    """Body POST /orders."""

    cart_id: int = Field(..., gt=0, alias="cartID")

    model_config = ConfigDict(populate_by_name=True)


class OrderLineOut(BaseModel):
    id: int
    order_id: int
    item_id: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    cart_id: int
    created_at: datetime
    lines: List[OrderLineOut]

    model_config = ConfigDict(from_attributes=True)
