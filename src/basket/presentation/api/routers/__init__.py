from basket.presentation.api.routers.auth import router as auth_router
from basket.presentation.api.routers.cart import router as cart_router

__all__ = [
    "auth_router",
    "cart_router",
]
