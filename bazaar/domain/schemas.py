# bazaar/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class ProductCreate(BaseModel):
    """Schema dla dodawania produktu do katalogu."""

    id: int = Field(..., gt=0, description="Numeryczne ID produktu (musi byc > 0)")
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Cena (>= 0)")
    type: str = Field(..., min_length=1, max_length=100)
    stock: int = Field(..., ge=0, description="Stan magazynowy (>= 0)")
    image: str | None = Field(None, description="Zdjecie w base64")


class ProductOut(BaseModel):
    """Schema dla produktu (response)."""

    id: int
    name: str
    description: str
    price: Decimal
    type: str
    stock: int
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    product_id: int
    quantity: int
    name: str | None = None
    price: Decimal | None = None
    line_total: Decimal | None = None
    available: bool = True


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]
    total: Decimal


class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    items: List[OrderItemOut]
    total: Decimal
    created_at: datetime


class SignupIn(BaseModel):
    """Schema dla rejestracji."""

    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=72)


class LoginIn(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    """Schema dla uzytkownika (response)."""

    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    message: str
