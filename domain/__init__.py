"""
Domain layer - Schemas, mappers, and enums.
"""

from domain import enums, mappers, schemas

__all__ = ["enums", "mappers", "schemas"]
