"""FastAPI routers for the storefront."""
from .storefront import router as storefront_router

__all__ = ["storefront_router"]
