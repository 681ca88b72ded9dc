import threading

import pytest
from sqlalchemy import func, select

from shop.data.models.cart import CartModel
from shop.data.models.cart_line import CartLineModel
from shop.data.models.order import OrderModel
from shop.data.models.order_line import OrderLineModel
from shop.domain.errors import CartNotFound, EmptyCart, Forbidden, ItemNotFound
from shop.services.cart_service import CartService
from shop.services.lock_service import LocalLockService
from shop.services.order_service import OrderService


def test_get_or_create_cart_returns_same_cart(cart_service, alice):
    first = cart_service.get_or_create_cart(alice)
    second = cart_service.get_or_create_cart(alice)

    assert first == second


def test_users_get_separate_carts(cart_service, alice, bob):
    assert cart_service.get_or_create_cart(alice) != cart_service.get_or_create_cart(bob)


def test_add_line_creates_cart_lazily(cart_service, alice, book):
    assert cart_service.list_carts(alice) == []

    line = cart_service.add_line(alice, book.id)

    carts = cart_service.list_carts(alice)
    assert len(carts) == 1
    assert carts[0].id == line.cart_id
    assert carts[0].user_id == alice.id


def test_lines_follow_call_order(cart_service, alice, book, pen):
    added = [
        cart_service.add_line(alice, book.id),
        cart_service.add_line(alice, pen.id),
        cart_service.add_line(alice, book.id),
    ]

    lines = cart_service.get_lines(added[0].cart_id)

    assert [line.id for line in lines] == [line.id for line in added]
    assert [line.item_id for line in lines] == [book.id, pen.id, book.id]


def test_add_line_bumps_cart_version(cart_service, alice, book):
    line = cart_service.add_line(alice, book.id)
    cart_service.add_line(alice, book.id)

    assert cart_service.get_cart(alice, line.cart_id).version == 3


def test_add_missing_item(cart_service, alice):
    with pytest.raises(ItemNotFound):
        cart_service.add_line(alice, 12345)

    assert cart_service.list_carts(alice) == []


def test_clear_lines_keeps_cart(cart_service, alice, book):
    cart_id = cart_service.add_line(alice, book.id).cart_id
    cart_service.add_line(alice, book.id)

    assert cart_service.clear_lines(cart_id) == 2
    cart_service.repo.commit()

    assert cart_service.get_lines(cart_id) == []
    assert cart_service.get_or_create_cart(alice) == cart_id


def test_clear_lines_only_removes_given_lines(cart_service, alice, book, pen):
    first = cart_service.add_line(alice, book.id)
    second = cart_service.add_line(alice, pen.id)

    assert cart_service.clear_lines(first.cart_id, [first.id]) == 1
    cart_service.repo.commit()

    assert [line.id for line in cart_service.get_lines(first.cart_id)] == [second.id]


def test_get_cart_of_other_user_is_forbidden(cart_service, alice, bob, book):
    cart_id = cart_service.add_line(alice, book.id).cart_id

    with pytest.raises(Forbidden):
        cart_service.get_cart(bob, cart_id)


def test_get_missing_cart(cart_service, alice):
    with pytest.raises(CartNotFound):
        cart_service.get_cart(alice, 999)


def test_unique_constraint_fallback_returns_existing_cart(db, cart_service, alice, monkeypatch):
    # inny proces utworzyl koszyk miedzy lookupem a insertem
    existing = CartModel(user_id=alice.id, version=1)
    db.add(existing)
    db.commit()

    real_lookup = cart_service.repo.get_cart_by_user
    calls = {"n": 0}

    def stale_lookup(user_id):
        calls["n"] += 1
        if calls["n"] <= 2:
            return None
        return real_lookup(user_id)

    monkeypatch.setattr(cart_service.repo, "get_cart_by_user", stale_lookup)

    assert cart_service.get_or_create_cart(alice) == existing.id


def _run_concurrently(n, target):
    barrier = threading.Barrier(n)
    results, errors = [None] * n, []

    def worker(i):
        try:
            barrier.wait()
            results[i] = target(i)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return results, errors


def test_concurrent_get_or_create_yields_single_cart(database, lock_service, alice):
    def create(_):
        session = database.session()
        try:
            return CartService(session, lock_service).get_or_create_cart(alice)
        finally:
            session.close()

    results, errors = _run_concurrently(4, create)

    assert errors == []
    assert len(set(results)) == 1
    session = database.session()
    try:
        count = session.execute(
            select(func.count()).select_from(CartModel).where(CartModel.user_id == alice.id)
        ).scalar_one()
    finally:
        session.close()
    assert count == 1


def test_concurrent_add_line_keeps_both_lines(database, lock_service, alice, book, pen):
    items = [book.id, pen.id]

    def add(i):
        session = database.session()
        try:
            return CartService(session, lock_service).add_line(alice, items[i])
        finally:
            session.close()

    results, errors = _run_concurrently(2, add)

    assert errors == []
    assert results[0].cart_id == results[1].cart_id

    session = database.session()
    try:
        lines = CartService(session, lock_service).get_lines(results[0].cart_id)
    finally:
        session.close()
    assert sorted(line.item_id for line in lines) == sorted(items)


def test_concurrent_checkout_and_add_line_lose_nothing(database, alice, book, pen):
    locks = LocalLockService(ttl=30, wait=10)
    session = database.session()
    try:
        cart_id = CartService(session, locks).get_or_create_cart(alice)
    finally:
        session.close()

    adders, adds_each, checkouts, attempts_each = 3, 10, 2, 5
    items = [book.id, pen.id]

    def work(i):
        session = database.session()
        try:
            carts = CartService(session, locks)
            if i < adders:
                for n in range(adds_each):
                    carts.add_line(alice, items[n % 2])
                return 0
            orders = OrderService(session, carts, locks)
            placed = 0
            for _ in range(attempts_each):
                try:
                    orders.checkout(alice, cart_id)
                    placed += 1
                except EmptyCart:
                    pass
            return placed
        finally:
            session.close()

    results, errors = _run_concurrently(adders + checkouts, work)

    assert errors == []
    session = database.session()
    try:
        order_lines = session.execute(select(func.count()).select_from(OrderLineModel)).scalar_one()
        cart_lines = session.execute(
            select(func.count()).select_from(CartLineModel).where(CartLineModel.cart_id == cart_id)
        ).scalar_one()
        orders = session.execute(select(func.count()).select_from(OrderModel)).scalar_one()
    finally:
        session.close()
    assert order_lines + cart_lines == adders * adds_each
    assert orders == sum(results)


def test_line_ids_are_not_reused_after_checkout(cart_service, order_service, alice, book):
    first = cart_service.add_line(alice, book.id)
    order = order_service.checkout(alice, first.cart_id)

    again = cart_service.add_line(alice, book.id)

    assert again.id > first.id
    second_order = order_service.checkout(alice, again.cart_id)
    assert second_order.lines[0].id > order.lines[0].id
