"""
Spark integration for the catalog bridge.

Provides the SparkSession-backed query engine collaborator.
"""

from .client import SparkEngineSession
from .config import SparkConfig

__all__ = ["SparkEngineSession", "SparkConfig"]
