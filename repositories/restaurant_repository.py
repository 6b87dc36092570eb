"""
Restaurant Repository - Data access layer for restaurant documents
"""

from typing import Any, Dict

from adapters.mongo_adapter import RESTAURANTS
from domain.enums import RestaurantStatus
from repositories.base import BaseRepository


class RestaurantRepository(BaseRepository):
    """Repository for the ``restaurants`` collection."""

    collection_name = RESTAURANTS

    def create_restaurant(
        self, name: str, logo: str, status: RestaurantStatus = RestaurantStatus.OPEN
    ) -> Dict[str, Any]:
        """Insert a restaurant and return the stored document"""
        return self.create(
            {"name": name, "logo": logo, "status": RestaurantStatus(status).value}
        )
