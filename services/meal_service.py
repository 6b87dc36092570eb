from typing import Any, Dict, List, Tuple
import logging

from bson import ObjectId
from pymongo.database import Database

from app.exceptions import NotFoundError
from domain.mappers import MealMapper
from domain.schemas.meal_schemas import MealCreate, MealListQuery, MealUpdate
from repositories import MealRepository, RestaurantRepository

logger = logging.getLogger("mealhub.meal")

MEAL_NOT_FOUND = "Meal not found"


class MealService:
    @staticmethod
    def list_meals(db: Database, query: MealListQuery) -> Tuple[List[Dict[str, Any]], int]:
        """
        List meals with a summary of their restaurant.

        Returns:
            The shaped meals and the number of meals in the collection. The
            count ignores ``search`` and ``limit``.
        """
        meal_repo = MealRepository(db)
        meals = meal_repo.list_with_restaurants(query.search_term, query.limit_value)
        total = meal_repo.count()
        logger.debug(
            "Listed %d meals (search=%r, limit=%d, total=%d)",
            len(meals),
            query.search_term,
            query.limit_value,
            total,
        )
        return [MealMapper.to_public(m) for m in meals], total

    @staticmethod
    def get_meal(db: Database, meal_id: str) -> Dict[str, Any]:
        """
        Fetch one meal with its restaurant fully embedded.

        Raises:
            NotFoundError: if no meal has this id
        """
        meal = MealRepository(db).get_with_restaurant(ObjectId(meal_id))
        if meal is None:
            raise NotFoundError(MEAL_NOT_FOUND)
        meal.setdefault("restaurant", None)
        return MealMapper.to_public(meal)

    @staticmethod
    def create_meal(db: Database, payload: MealCreate) -> Dict[str, Any]:
        """
        Create a restaurant, then a meal that references it.

        The two inserts are independent writes. If the meal insert fails the
        restaurant stays in the database without a meal.
        """
        restaurant = RestaurantRepository(db).create_restaurant(
            name=payload.restaurant.name,
            logo=payload.restaurant.logo,
            status=payload.restaurant.status,
        )
        meal = MealRepository(db).create_meal(
            food_name=payload.foodName,
            rating=payload.rating,
            image_url=payload.imageUrl,
            restaurant_id=restaurant["_id"],
        )
        logger.info("Created meal %s for restaurant %s", meal["_id"], restaurant["_id"])
        return {
            "meal": MealMapper.to_public(meal),
            "restaurant": MealMapper.to_public(restaurant),
        }

    @staticmethod
    def update_meal(db: Database, meal_id: str, payload: MealUpdate) -> Dict[str, Any]:
        """
        Apply the keys present in ``payload`` and return the updated meal with
        its restaurant embedded.

        Raises:
            NotFoundError: if no meal has this id
        """
        fields = payload.changes()
        if "restaurant" in fields:
            fields["restaurant"] = ObjectId(fields["restaurant"])

        oid = ObjectId(meal_id)
        meal_repo = MealRepository(db)
        if meal_repo.update_fields(oid, fields) is None:
            raise NotFoundError(MEAL_NOT_FOUND)
        logger.info("Updated meal %s (fields: %s)", meal_id, sorted(fields))

        meal = meal_repo.get_with_restaurant(oid)
        if meal is None:
            # Deleted between the update and the read
            raise NotFoundError(MEAL_NOT_FOUND)
        meal.setdefault("restaurant", None)
        return MealMapper.to_public(meal)

    @staticmethod
    def delete_meal(db: Database, meal_id: str) -> Dict[str, Any]:
        """
        Delete a meal and return it as it was before deletion. Its restaurant
        is left in place.

        Raises:
            NotFoundError: if no meal has this id
        """
        meal = MealRepository(db).delete(ObjectId(meal_id))
        if meal is None:
            raise NotFoundError(MEAL_NOT_FOUND)
        logger.info("Deleted meal %s", meal_id)
        return MealMapper.to_public(meal)
