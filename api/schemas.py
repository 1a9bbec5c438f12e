"""
Project: Digital Menu marketplace

Description:
Request bodies. Each endpoint parses its JSON through one of these models;
a pydantic ValidationError becomes a 422 with per-field messages.
"""

from decimal import Decimal, ROUND_DOWN
from typing import Annotated, List, Literal, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from models import ORDER_STATUSES

TWO_PLACES = Decimal("0.01")
MAX_ID = 2 ** 63 - 1
MAX_QUANTITY = 10_000

# primary keys are signed 64-bit integers
RecordId = Annotated[int, Field(le=MAX_ID)]

OrderStatus = Literal[ORDER_STATUSES]


def parse_body(schema):
    """Validate the current request's JSON body against ``schema``."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    return schema.model_validate(data)


def to_cents(value):
    # stored with two decimals, extra digits are dropped
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_DOWN)


class RequestBody(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    def changes(self):
        """Fields the caller actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class RegisterBody(RequestBody):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    role: Literal["restaurant", "customer"]


class LoginBody(RequestBody):
    # plain string: the literal "admin" has to get through
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RestaurantCreate(RequestBody):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    address: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    image: str = Field(min_length=1)
    cuisine: str = Field(min_length=1)


class RestaurantUpdate(RequestBody):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = Field(default=None, min_length=1)
    cuisine: Optional[str] = Field(default=None, min_length=1)


class MenuItemCreate(RequestBody):
    restaurant_id: RecordId
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Decimal
    image: str = Field(min_length=1)
    category: str = Field(min_length=1)

    @field_validator("price")
    @classmethod
    def two_decimals(cls, v):
        return to_cents(v)


class MenuItemUpdate(RequestBody):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = None
    image: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    is_available: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def two_decimals(cls, v):
        return to_cents(v) if v is not None else v


class OrderLine(RequestBody):
    menu_item_id: RecordId
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


class OrderCreate(RequestBody):
    restaurant_id: RecordId
    items: List[OrderLine] = Field(min_length=1)


class StatusUpdate(RequestBody):
    status: OrderStatus
