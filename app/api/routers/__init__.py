"""
app/api/routers package marker.
"""

from app.api.routers.analytics_router import router as analytics_router
from app.api.routers.payments_router import router as payments_router

__all__ = [
    "analytics_router",
    "payments_router",
]
