#bookstore/api/routers/carts.py
from uuid import UUID

from fastapi import APIRouter, Depends

from bookstore.api.deps import get_cart_service, get_principal
from bookstore.domain.principal import Principal
from bookstore.domain.schemas import CartOut, ItemIn, StatusOut
from bookstore.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    principal: Principal = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_cart(principal)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    principal: Principal = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    return svc.add_item(principal, payload.book_id, payload.count)


@router.put("/items", response_model=CartOut)
def update_item(
    payload: ItemIn,
    principal: Principal = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    return svc.update_item(principal, payload.book_id, payload.count)


@router.delete("/items/{book_id}", response_model=CartOut)
def remove_item(
    book_id: UUID,
    principal: Principal = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    return svc.remove_item(principal, book_id)


@router.post("/clear", response_model=StatusOut)
def clear_cart(
    principal: Principal = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    svc.clear(principal)
    return {"status": "ok"}
