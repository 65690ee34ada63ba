"""
lakemeta - Spark catalog to platform metadata bridge

Imports tables from a Spark session catalog into registered platform
table descriptors while keeping their identity across re-imports.
"""

__version__ = "0.1.0"

from lakemeta.core.config import settings
from lakemeta.core.logging import get_logger

logger = get_logger(__name__)

__all__ = ["settings", "logger", "__version__"]
