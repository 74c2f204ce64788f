# Routers package
from . import verify_router

__all__ = [
    "verify_router",
]
