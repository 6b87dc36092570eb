"""
Services package - Business logic layer.
"""

from services.meal_service import MealService

__all__ = ["MealService"]
