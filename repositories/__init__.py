"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.meal_repository import MealRepository
from repositories.restaurant_repository import RestaurantRepository

__all__ = [
    "BaseRepository",
    "MealRepository",
    "RestaurantRepository",
]
