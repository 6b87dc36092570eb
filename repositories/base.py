"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Dict, Optional
from abc import ABC

from bson import ObjectId
from pymongo.database import Database


class BaseRepository(ABC):
    """
    Base repository providing common operations on one MongoDB collection.
    All repositories should inherit from this class.
    """

    collection_name: str = ""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db[self.collection_name]

    def get_by_id(self, entity_id: ObjectId) -> Optional[Dict[str, Any]]:
        """
        Get document by ID.

        Args:
            entity_id: document ObjectId

        Returns:
            Document or None if not found
        """
        return self.collection.find_one({"_id": entity_id})

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new document with a freshly generated ObjectId"""
        doc = {"_id": ObjectId(), **document}
        self.collection.insert_one(doc)
        return doc

    def count(self) -> int:
        """Count every document in the collection"""
        return self.collection.count_documents({})
