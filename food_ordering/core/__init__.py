"""
Core module initialization.
Exports configuration, logging utilities and the base error type.
"""

from food_ordering.core.config import get_settings, Settings, EnvironmentMode
from food_ordering.core.errors import OrderingError

__all__ = ["get_settings", "Settings", "EnvironmentMode", "OrderingError"]
