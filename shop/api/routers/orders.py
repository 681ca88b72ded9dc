# shop/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends

from shop.api.deps import get_current_user, get_order_service, to_http
from shop.domain.errors import ShopError
from shop.domain.identity import UserIdentity
from shop.domain.schemas import OrderCreate, OrderOut
from shop.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user: UserIdentity = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    """
    Checkout: zamienia koszyk w zamówienie i czyści koszyk.
    Wysyła powiadomienie asynchronicznie.
    """
    try:
        return svc.checkout(user, payload.cart_id)
    except ShopError as e:
        raise to_http(e)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user: UserIdentity = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserIdentity = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    """
    Pobiera szczegóły zamówienia.
    """
    try:
        return svc.get_order(user, order_id)
    except ShopError as e:
        raise to_http(e)
