# shop/api/__init__.py
from fastapi import FastAPI
from shop.api.routers import carts, health, items, orders, users


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(items.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    return app
