# shop/api/routers/items.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shop.api.deps import get_db, to_http
from shop.domain.errors import ShopError
from shop.domain.schemas import ItemCreate, ItemOut
from shop.services.catalog_service import CatalogService

router = APIRouter(prefix="/items", tags=["items"])


@router.post("", response_model=ItemOut, status_code=201)
def create_item(payload: ItemCreate, db: Session = Depends(get_db)):
    return CatalogService(db).create_item(payload)


@router.get("", response_model=List[ItemOut])
def list_items(db: Session = Depends(get_db)):
    return CatalogService(db).list_items()


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_item(item_id)
    except ShopError as e:
        raise to_http(e)
