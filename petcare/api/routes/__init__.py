# petcare/api/routes/__init__.py
from petcare.api.routes import auth, orders, pets, services, tariffs, users

routers = [
    auth.router,
    users.router,
    pets.router,
    services.router,
    tariffs.router,
    orders.router,
]

__all__ = ["routers"]
