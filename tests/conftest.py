import os

# przed importem shop: bez brokera celery wykonuje taski lokalnie
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "1")
os.environ.setdefault("LOCK_BACKEND", "local")

from decimal import Decimal

import pytest

from shop.celery_worker import celery_app
from shop.data.database import Database
from shop.domain.schemas import ItemCreate, UserCreate
from shop.services.cart_service import CartService
from shop.services.catalog_service import CatalogService
from shop.services.lock_service import LocalLockService
from shop.services.order_service import OrderService
from shop.services.user_service import UserService


@pytest.fixture(autouse=True)
def eager_celery():
    celery_app.conf.task_always_eager = True
    yield


@pytest.fixture
def database(tmp_path):
    # plik zamiast :memory:, zeby testy z watkami mialy osobne polaczenia
    database = Database(f"sqlite:///{tmp_path / 'shop.db'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def lock_service():
    return LocalLockService(ttl=30, wait=2)


@pytest.fixture
def alice(db):
    users = UserService(db)
    users.register(UserCreate(username="alice", password="secret"))
    return users.resolve_token(users.login("alice", "secret"))


@pytest.fixture
def bob(db):
    users = UserService(db)
    users.register(UserCreate(username="bob", password="hunter2"))
    return users.resolve_token(users.login("bob", "hunter2"))


@pytest.fixture
def book(db):
    return CatalogService(db).create_item(ItemCreate(name="Book", price=Decimal("9.99")))


@pytest.fixture
def pen(db):
    return CatalogService(db).create_item(ItemCreate(name="Pen", price=Decimal("1.50")))


@pytest.fixture
def cart_service(db, lock_service):
    return CartService(db=db, lock_service=lock_service)


@pytest.fixture
def order_service(db, lock_service, cart_service):
    return OrderService(db=db, cart_service=cart_service, lock_service=lock_service)
