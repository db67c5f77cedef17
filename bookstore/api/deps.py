# bookstore/api/deps.py
from uuid import UUID

from fastapi import Header, HTTPException, Request

from bookstore.domain.enums import UserRole
from bookstore.domain.principal import Principal
from bookstore.services.cart_service import CartService
from bookstore.services.order_service import OrderService


def get_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default=UserRole.USER.value),
) -> Principal:
    """
    Caller identity forwarded by the auth gateway, which has already verified the token.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="missing user identity")

    try:
        user_id = UUID(x_user_id)
        role = UserRole(x_user_role.upper())
    except ValueError:
        raise HTTPException(status_code=401, detail="invalid user identity")

    return Principal(user_id=user_id, role=role)


def get_cart_service(request: Request) -> CartService:
    return CartService(tx=request.app.state.tx)


def get_order_service(request: Request) -> OrderService:
    return OrderService(
        tx=request.app.state.tx,
        notifications=request.app.state.notifications,
    )
