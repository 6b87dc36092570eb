"""MongoDB adapter holding the process-wide client for the meal and restaurant collections.
"""

from typing import Optional
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger("mealhub.mongo")

MEALS = "meals"
RESTAURANTS = "restaurants"

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


# ------------------ Connection ------------------
def connect(uri: str, default_db: str = "eskalate_meals", timeout_ms: int = 5000) -> Database:
    """Create the client, ping the server and select the database.

    The database named in the connection string wins over ``default_db``.
    Errors propagate to the caller; the client is discarded on failure.
    """
    global _client, _db
    client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    _client = client
    _db = client.get_default_database(default=default_db)
    logger.info("Connected to MongoDB (database: %s)", _db.name)
    return _db


def ensure_indexes(db: Database) -> None:
    """Create the lookup index on restaurant names."""
    db[RESTAURANTS].create_index([("name", ASCENDING)])
    logger.debug("Ensured index on %s.name", RESTAURANTS)


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    finally:
        _client = None
        _db = None


def get_db() -> Database:
    """Return the connected database.

    Raises:
        RuntimeError: if ``connect`` has not succeeded yet
    """
    if _db is None:
        raise RuntimeError("MongoDB client is not connected")
    return _db
