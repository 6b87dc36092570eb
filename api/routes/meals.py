"""
Meal routes - list, read, create, update and delete meals.
Creating a meal also creates the restaurant that serves it.
"""

from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from pymongo.database import Database

from api.dependencies import get_db
from api.responses import APIResponse, ErrorResponse, success_response
from domain.schemas.meal_schemas import MealCreate, MealListQuery, MealUpdate, ObjectIdStr
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])

MealId = Annotated[ObjectIdStr, Path(description="24 character hex ObjectId")]

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}
_ERRORS_WITH_404 = {**_ERRORS, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.get("", responses={200: {"model": APIResponse[List[Dict[str, Any]]]}, **_ERRORS})
def list_meals(
    query: Annotated[MealListQuery, Query()],
    db: Database = Depends(get_db),
):
    """
    List meals with their restaurant's name, logo and status.

    - **search**: case-insensitive substring of the meal's food name
    - **limit**: maximum number of meals returned (default 8)
    - **page**: accepted, not used

    `pagination.total` is the number of meals in the store, whatever the
    search and limit.
    """
    meals, total = MealService.list_meals(db, query)
    return success_response(meals, total=total)


@router.get("/{meal_id}", responses=_ERRORS_WITH_404)
def get_meal(meal_id: MealId, db: Database = Depends(get_db)):
    """Get a single meal with its restaurant embedded"""
    return success_response(MealService.get_meal(db, meal_id))


@router.post("", status_code=status.HTTP_201_CREATED, responses=_ERRORS)
def create_meal(payload: MealCreate, db: Database = Depends(get_db)):
    """
    Create a restaurant and a meal served by it.

    The restaurant is written first. If writing the meal then fails, the
    restaurant remains without any meal.
    """
    created = MealService.create_meal(db, payload)
    return success_response(created, status_code=status.HTTP_201_CREATED)


@router.put("/{meal_id}", responses=_ERRORS_WITH_404)
def update_meal(
    meal_id: MealId,
    payload: Optional[MealUpdate] = None,
    db: Database = Depends(get_db),
):
    """Update only the fields present in the body"""
    meal = MealService.update_meal(db, meal_id, payload or MealUpdate())
    return success_response(meal)


@router.delete("/{meal_id}", responses=_ERRORS_WITH_404)
def delete_meal(meal_id: MealId, db: Database = Depends(get_db)):
    """Delete a meal; its restaurant is kept"""
    return success_response(MealService.delete_meal(db, meal_id))
