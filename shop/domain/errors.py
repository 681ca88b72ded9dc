# shop/domain/errors.py


class ShopError(Exception):
    """Bazowy blad domeny; status_code uzywany przez warstwe HTTP."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(ShopError):
    status_code = 401


class Forbidden(ShopError, PermissionError):
    status_code = 403


class NotFound(ShopError, LookupError):
    status_code = 404


class ItemNotFound(NotFound):
    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class CartNotFound(NotFound):
    def __init__(self, cart_id: int):
        super().__init__(f"Cart {cart_id} not found")
        self.cart_id = cart_id


class OrderNotFound(NotFound):
    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class EmptyCart(ShopError, ValueError):
    status_code = 400

    def __init__(self, cart_id: int):
        super().__init__(f"Cart {cart_id} is empty")
        self.cart_id = cart_id


class Conflict(ShopError):
    """Rownolegla modyfikacja; klient moze powtorzyc zadanie."""

    status_code = 409
