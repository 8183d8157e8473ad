"""API route modules."""

from src.api.routes.activity import router as activity_router
from src.api.routes.customers import router as customers_router
from src.api.routes.health import router as health_router
from src.api.routes.invoices import router as invoices_router
from src.api.routes.parts import router as parts_router
from src.api.routes.payments import router as payments_router
from src.api.routes.pricing import router as pricing_router

__all__ = [
    "health_router",
    "parts_router",
    "customers_router",
    "invoices_router",
    "payments_router",
    "pricing_router",
    "activity_router",
]
