"""
API route modules.
"""

from .catalog import router as catalog_router
from .health import router as health_router

__all__ = ["catalog_router", "health_router"]
