# bookstore/api/routers/orders.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from bookstore.api.deps import get_order_service, get_principal
from bookstore.domain.principal import Principal
from bookstore.domain.schemas import CheckoutIn, OrderView, PaymentConfirmIn
from bookstore.services.order_service import OrderService
from bookstore.utils.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

router = APIRouter(tags=["orders"])


@router.post("/orders/checkout", response_model=OrderView, status_code=201)
def checkout(
    payload: CheckoutIn,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    """
    Creates a PENDING order from the caller's cart.
    Not idempotent: every call creates a new order.
    """
    return svc.checkout(principal, payload.payment_method)


@router.post("/orders/confirm", response_model=OrderView)
def confirm_payment(
    payload: PaymentConfirmIn,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return svc.confirm_payment(principal, payload.order_id, payload.success)


@router.get("/orders", response_model=List[OrderView])
def list_my_orders(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_user_orders(principal, limit, offset)


@router.get("/orders/{order_id}", response_model=OrderView)
def get_order(
    order_id: UUID,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_order(principal, order_id)


@router.get("/admin/orders", response_model=List[OrderView])
def list_all_orders(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_all_orders(principal, limit, offset)
