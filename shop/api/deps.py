# shop/api/deps.py
from typing import Iterator

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from shop.domain.errors import ShopError
from shop.domain.identity import UserIdentity
from shop.services.cart_service import CartService
from shop.services.lock_service import LockService
from shop.services.order_service import OrderService
from shop.services.user_service import UserService


def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.database.sessions()


def get_lock_service(request: Request) -> LockService:
    return request.app.state.lock_service


def get_current_user(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> UserIdentity:
    # naglowek Authorization to surowy token, bez "Bearer"
    user = UserService(db).resolve_token(authorization)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user


def get_cart_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service)


def get_order_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    cart_service: CartService = Depends(get_cart_service),
) -> OrderService:
    return OrderService(db=db, cart_service=cart_service, lock_service=lock_service)


def to_http(e: ShopError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)
