"""Pydantic request/response schemas for the storefront API.

These are external contracts, separate from the Protean commands and
aggregates behind them. Responses always carry the full entity.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class SignUpRequest(BaseModel):
    email: str
    password: str
    name: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "wes@example.com",
                    "password": "secret123",
                    "name": "Wes",
                }
            ]
        }
    }


class SignInRequest(BaseModel):
    email: str
    password: str


class RequestResetRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    reset_token: str
    password: str
    confirm_password: str


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    permissions: list[str]

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            permissions=sorted(p.value for p in user.permission_set),
        )


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------
class CreateItemRequest(BaseModel):
    title: str
    description: str
    price: int = Field(ge=0, description="Price in minor currency units")
    image: str | None = None
    large_image: str | None = None


class UpdateItemRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    price: int | None = Field(default=None, ge=0)
    image: str | None = None
    large_image: str | None = None


class ItemResponse(BaseModel):
    id: str
    title: str
    description: str
    price: int
    image: str | None = None
    large_image: str | None = None
    user_id: str

    @classmethod
    def from_item(cls, item) -> "ItemResponse":
        return cls(
            id=str(item.id),
            title=item.title,
            description=item.description,
            price=item.price,
            image=item.image,
            large_image=item.large_image,
            user_id=str(item.user_id),
        )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    item_id: str


class CartItemResponse(BaseModel):
    id: str
    item_id: str
    user_id: str
    quantity: int

    @classmethod
    def from_cart_item(cls, cart_item) -> "CartItemResponse":
        return cls(
            id=str(cart_item.id),
            item_id=str(cart_item.item_id),
            user_id=str(cart_item.user_id),
            quantity=cart_item.quantity,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    token: str = Field(description="Client-side payment source token")


class OrderItemResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    image: str | None = None
    large_image: str | None = None
    price: int
    quantity: int


class OrderResponse(BaseModel):
    id: str
    user_id: str
    total: int
    charge: str
    created_at: datetime | None = None
    items: list[OrderItemResponse]

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            total=order.total,
            charge=order.charge,
            created_at=order.created_at,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    title=item.title,
                    description=item.description,
                    image=item.image,
                    large_image=item.large_image,
                    price=item.price,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
        )


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------
class UpdatePermissionsRequest(BaseModel):
    permissions: list[str] = Field(min_length=1)
