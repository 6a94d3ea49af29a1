"""FastAPI routes for the storefront — auth, items, cart, orders and permissions."""

import json

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from sickfits.api.dependencies import (
    clear_session_cookie,
    current_user,
    current_user_id,
    set_session_cookie,
)
from sickfits.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    CheckoutRequest,
    CreateItemRequest,
    ItemResponse,
    MessageResponse,
    OrderResponse,
    RequestResetRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    UpdateItemRequest,
    UpdatePermissionsRequest,
    UserResponse,
)
from sickfits.auth.guard import require_authenticated, require_owner_or_permission
from sickfits.auth.permissions import Permission
from sickfits.cart.cart_item import CartItem
from sickfits.cart.items import AddToCart, RemoveFromCart
from sickfits.catalogue.item import Item
from sickfits.catalogue.management import CreateItem, DeleteItem, UpdateItem
from sickfits.checkout.saga import CheckoutSaga
from sickfits.order.order import Order
from sickfits.user.password_reset import PasswordResetFlow
from sickfits.user.permissions import UpdatePermissions
from sickfits.user.sessions import SessionService

# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/signup", status_code=201, response_model=UserResponse)
async def sign_up(body: SignUpRequest, response: Response) -> UserResponse:
    session = SessionService().sign_up(email=body.email, password=body.password, name=body.name)
    set_session_cookie(response, session.token)
    return UserResponse.from_user(session.user)


@auth_router.post("/signin", response_model=UserResponse)
async def sign_in(body: SignInRequest, response: Response) -> UserResponse:
    session = SessionService().sign_in(email=body.email, password=body.password)
    set_session_cookie(response, session.token)
    return UserResponse.from_user(session.user)


@auth_router.post("/signout", response_model=MessageResponse)
async def sign_out(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="Goodbye!")


@auth_router.get("/me", response_model=UserResponse | None)
async def me(user=Depends(current_user)) -> UserResponse | None:
    if user is None:
        return None
    return UserResponse.from_user(user)


@auth_router.post("/request-reset", response_model=MessageResponse)
async def request_reset(body: RequestResetRequest) -> MessageResponse:
    acknowledgement = PasswordResetFlow().request_reset(body.email)
    return MessageResponse(**acknowledgement)


@auth_router.post("/reset-password", response_model=UserResponse)
async def reset_password(body: ResetPasswordRequest, response: Response) -> UserResponse:
    session = PasswordResetFlow().reset_password(
        token=body.reset_token,
        password=body.password,
        confirm_password=body.confirm_password,
    )
    set_session_cookie(response, session.token)
    return UserResponse.from_user(session.user)


# ---------------------------------------------------------------------------
# Item Router
# ---------------------------------------------------------------------------
item_router = APIRouter(prefix="/items", tags=["items"])


@item_router.get("", response_model=list[ItemResponse])
async def list_items() -> list[ItemResponse]:
    items = current_domain.repository_for(Item)._dao.query.all().items
    return [ItemResponse.from_item(item) for item in items]


@item_router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: str) -> ItemResponse:
    item = current_domain.repository_for(Item).get(item_id)
    return ItemResponse.from_item(item)


@item_router.post("", status_code=201, response_model=ItemResponse)
async def create_item(body: CreateItemRequest, user_id: str | None = Depends(current_user_id)) -> ItemResponse:
    command = CreateItem(
        user_id=user_id,
        title=body.title,
        description=body.description,
        price=body.price,
        image=body.image,
        large_image=body.large_image,
    )
    item = current_domain.process(command, asynchronous=False)
    return ItemResponse.from_item(item)


@item_router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: str,
    body: UpdateItemRequest,
    user_id: str | None = Depends(current_user_id),
) -> ItemResponse:
    command = UpdateItem(
        user_id=user_id,
        item_id=item_id,
        title=body.title,
        description=body.description,
        price=body.price,
        image=body.image,
        large_image=body.large_image,
    )
    item = current_domain.process(command, asynchronous=False)
    return ItemResponse.from_item(item)


@item_router.delete("/{item_id}", response_model=ItemResponse)
async def delete_item(item_id: str, user_id: str | None = Depends(current_user_id)) -> ItemResponse:
    command = DeleteItem(user_id=user_id, item_id=item_id)
    item = current_domain.process(command, asynchronous=False)
    return ItemResponse.from_item(item)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=list[CartItemResponse])
async def view_cart(user_id: str | None = Depends(current_user_id)) -> list[CartItemResponse]:
    user_id = require_authenticated(user_id)
    cart_items = current_domain.repository_for(CartItem).find_for_user(user_id)
    return [CartItemResponse.from_cart_item(cart_item) for cart_item in cart_items]


@cart_router.post("", response_model=CartItemResponse)
async def add_to_cart(body: AddToCartRequest, user_id: str | None = Depends(current_user_id)) -> CartItemResponse:
    command = AddToCart(user_id=user_id, item_id=body.item_id)
    cart_item = current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_cart_item(cart_item)


@cart_router.delete("/{cart_item_id}", response_model=CartItemResponse)
async def remove_from_cart(cart_item_id: str, user_id: str | None = Depends(current_user_id)) -> CartItemResponse:
    command = RemoveFromCart(user_id=user_id, cart_item_id=cart_item_id)
    cart_item = current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_cart_item(cart_item)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def checkout(body: CheckoutRequest, user_id: str | None = Depends(current_user_id)) -> OrderResponse:
    order = CheckoutSaga().run(user_id=user_id, payment_token=body.token)
    return OrderResponse.from_order(order)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user_id: str | None = Depends(current_user_id)) -> list[OrderResponse]:
    user_id = require_authenticated(user_id)
    orders = current_domain.repository_for(Order).find_for_user(user_id)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user=Depends(current_user)) -> OrderResponse:
    require_authenticated(user.id if user is not None else None)
    order = current_domain.repository_for(Order).get(order_id)
    require_owner_or_permission(user, order.user_id, (Permission.ADMIN,))
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.put("/{target_user_id}/permissions", response_model=UserResponse)
async def update_permissions(
    target_user_id: str,
    body: UpdatePermissionsRequest,
    user_id: str | None = Depends(current_user_id),
) -> UserResponse:
    command = UpdatePermissions(
        user_id=user_id,
        target_user_id=target_user_id,
        permissions=json.dumps(body.permissions),
    )
    user = current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(user)
