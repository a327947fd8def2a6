"""HTTP layer - FastAPI routers."""

from .routes import router

__all__ = ["router"]
