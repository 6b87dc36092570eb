"""
API dependencies for dependency injection
"""

from pymongo.database import Database

from adapters import mongo_adapter


def get_db() -> Database:
    """
    MongoDB database dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Database = Depends(get_db)):
            # Use db here
            pass
    """
    return mongo_adapter.get_db()
