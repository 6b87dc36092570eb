"""
App package - Application configuration and core utilities.
Contains settings and exceptions shared by every layer.
"""

from app.config import settings
from app.exceptions import MealHubError, NotFoundError

__all__ = [
    "settings",
    "MealHubError",
    "NotFoundError",
]
