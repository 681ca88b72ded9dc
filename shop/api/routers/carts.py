#shop/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends

from shop.api.deps import get_cart_service, get_current_user, to_http
from shop.domain.errors import ShopError
from shop.domain.identity import UserIdentity
from shop.domain.schemas import CartLineIn, CartLineOut, CartOut
from shop.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


@router.post("", response_model=CartLineOut)
def add_to_cart(
    payload: CartLineIn,
    user: UserIdentity = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_line(user, payload.item_id)
    except ShopError as e:
        raise to_http(e)


@router.get("", response_model=List[CartOut])
def list_carts(
    user: UserIdentity = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return svc.list_carts(user)


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(
    cart_id: int,
    user: UserIdentity = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart(user, cart_id)
    except ShopError as e:
        raise to_http(e)
