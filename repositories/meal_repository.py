"""
Meal Repository - Data access layer for meal documents, including the
restaurant join used by the list and detail reads.
"""

import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from adapters.mongo_adapter import MEALS, RESTAURANTS
from repositories.base import BaseRepository

# Fields kept by the list projection; everything else is dropped.
LIST_PROJECTION = {
    "foodName": 1,
    "rating": 1,
    "imageUrl": 1,
    "restaurant.name": 1,
    "restaurant.logo": 1,
    "restaurant.status": 1,
}

_JOIN_RESTAURANT = {
    "$lookup": {
        "from": RESTAURANTS,
        "localField": "restaurant",
        "foreignField": "_id",
        "as": "restaurant",
    }
}


def build_list_pipeline(search: str, limit: int) -> List[Dict[str, Any]]:
    """Aggregation for the meal listing: filter, join, project, then limit.

    Args:
        search: text matched case-insensitively anywhere in ``foodName``;
            ignored when blank
        limit: maximum number of meals returned, applied last

    Returns:
        The pipeline stages in execution order
    """
    pipeline: List[Dict[str, Any]] = []

    term = search.strip()
    if term:
        pipeline.append(
            {"$match": {"foodName": {"$regex": re.escape(term), "$options": "i"}}}
        )

    # $unwind without preserveNullAndEmptyArrays drops meals whose restaurant is gone
    pipeline.extend(
        [
            _JOIN_RESTAURANT,
            {"$unwind": "$restaurant"},
            {"$project": LIST_PROJECTION},
            {"$limit": limit},
        ]
    )
    return pipeline


def build_detail_pipeline(meal_id: ObjectId) -> List[Dict[str, Any]]:
    """Aggregation returning one meal with its full restaurant document."""
    return [
        {"$match": {"_id": meal_id}},
        _JOIN_RESTAURANT,
        {"$unwind": {"path": "$restaurant", "preserveNullAndEmptyArrays": True}},
        {"$limit": 1},
    ]


class MealRepository(BaseRepository):
    """Repository for the ``meals`` collection."""

    collection_name = MEALS

    def list_with_restaurants(self, search: str = "", limit: int = 8) -> List[Dict[str, Any]]:
        """Run the listing pipeline and materialize the cursor"""
        return list(self.collection.aggregate(build_list_pipeline(search, limit)))

    def get_with_restaurant(self, meal_id: ObjectId) -> Optional[Dict[str, Any]]:
        """
        Get a meal with its restaurant embedded under ``restaurant``.

        A meal pointing at a missing restaurant is still returned; its
        ``restaurant`` key is then absent.

        Returns:
            Meal document or None if no meal has this id
        """
        docs = list(self.collection.aggregate(build_detail_pipeline(meal_id)))
        return docs[0] if docs else None

    def create_meal(
        self,
        food_name: str,
        rating: float,
        image_url: str,
        restaurant_id: ObjectId,
    ) -> Dict[str, Any]:
        """Insert a meal referencing an existing restaurant"""
        return self.create(
            {
                "foodName": food_name,
                "rating": rating,
                "imageUrl": image_url,
                "restaurant": restaurant_id,
            }
        )

    def update_fields(self, meal_id: ObjectId, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply ``fields`` with ``$set`` and return the document after the update.

        An empty ``fields`` mapping changes nothing; the current document is
        returned instead, since MongoDB rejects an empty ``$set``.
        """
        if not fields:
            return self.get_by_id(meal_id)
        return self.collection.find_one_and_update(
            {"_id": meal_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, meal_id: ObjectId) -> Optional[Dict[str, Any]]:
        """Delete a meal and return the document as it was before deletion"""
        return self.collection.find_one_and_delete({"_id": meal_id})
