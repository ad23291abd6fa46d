"""API route modules."""

from stockledger.api.routes.consumptions import router as consumptions_router
from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.inventory import router as inventory_router
from stockledger.api.routes.material_requests import router as material_requests_router
from stockledger.api.routes.receipts import router as receipts_router
from stockledger.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "inventory_router",
    "receipts_router",
    "consumptions_router",
    "material_requests_router",
    "reports_router",
]
