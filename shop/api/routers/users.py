from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shop.api.deps import get_db, to_http
from shop.domain.errors import ShopError
from shop.services.user_service import UserService
from shop.domain.schemas import LoginIn, TokenOut, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except ShopError as e:
        raise to_http(e)

@router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()

@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return TokenOut(token=service.login(payload.username, payload.password))
    except ShopError as e:
        raise to_http(e)

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except ShopError as e:
        raise to_http(e)
