"""
Meal domain mappers.
Turns raw MongoDB documents into JSON-ready dictionaries for the API.
"""

from typing import Any, Dict, Optional

from bson import ObjectId


class MealMapper:
    """Mapper for meal and restaurant documents."""

    @staticmethod
    def _plain(value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, dict):
            return MealMapper.to_public(value)
        if isinstance(value, list):
            return [MealMapper._plain(v) for v in value]
        return value

    @staticmethod
    def to_public(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Convert a MongoDB document to its public form.

        ``_id`` becomes ``id`` and every ObjectId, including nested ones such
        as an embedded restaurant, is rendered as its hex string.

        Args:
            doc: document as returned by pymongo, or None

        Returns:
            A new dictionary, or None when ``doc`` is None
        """
        if doc is None:
            return None
        out: Dict[str, Any] = {}
        if "_id" in doc:
            out["id"] = MealMapper._plain(doc["_id"])
        for key, value in doc.items():
            if key == "_id":
                continue
            out[key] = MealMapper._plain(value)
        return out
