"""
Domain mappers package.
"""

from domain.mappers.meal_mapper import MealMapper

__all__ = ["MealMapper"]
