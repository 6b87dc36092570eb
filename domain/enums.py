"""
Domain enums for MealHub.
"""

import enum


class RestaurantStatus(str, enum.Enum):
    """Whether a restaurant is currently taking orders"""

    OPEN = "open"
    CLOSE = "close"
