"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    ObjectIdStr,
    check_object_id,
    MealListQuery,
    RestaurantCreate,
    MealCreate,
    MealUpdate,
)

__all__ = [
    "ObjectIdStr",
    "check_object_id",
    "MealListQuery",
    "RestaurantCreate",
    "MealCreate",
    "MealUpdate",
]
