"""
Pydantic schemas for meal and restaurant requests.

Every inbound operation is checked against one of these models before any
MongoDB access happens. Messages raised here are sent back to the caller
verbatim, so they are written as short, user-facing phrases.
"""

import re
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from domain.enums import RestaurantStatus

OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")
DIGITS_RE = re.compile(r"[0-9]+")
# $limit is encoded as a signed 64-bit BSON integer
MAX_LIMIT = 2**63 - 1

# Keys an update may never touch: the id is immutable and ``$`` would be read
# as an update operator by MongoDB.
_PROTECTED_KEYS = {"_id", "id"}


def check_object_id(value: str) -> str:
    """Accept exactly 24 hexadecimal characters, MongoDB's ObjectId text form."""
    if not OBJECT_ID_RE.fullmatch(value):
        raise PydanticCustomError("object_id", "must be a 24 character hex string")
    return value


ObjectIdStr = Annotated[str, AfterValidator(check_object_id)]


def check_not_bool(value: Any) -> Any:
    """Refuse JSON booleans, which lax float parsing would turn into 0.0 or 1.0."""
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "must be a number")
    return value


Rating = Annotated[
    float, BeforeValidator(check_not_bool), Field(ge=0, le=5, allow_inf_nan=False)
]


class MealListQuery(BaseModel):
    """Query string of ``GET /meals``.

    ``page`` is accepted for client compatibility but does not move any
    cursor; ``limit`` is a hard cap on the number of returned meals.
    """

    page: str = "1"
    limit: str = "8"
    search: str = ""

    @field_validator("limit")
    @classmethod
    def limit_is_positive_integer(cls, v: str) -> str:
        if not DIGITS_RE.fullmatch(v) or not 1 <= int(v) <= MAX_LIMIT:
            raise PydanticCustomError("limit", "must be a positive integer")
        return v

    @property
    def limit_value(self) -> int:
        return int(self.limit)

    @property
    def search_term(self) -> str:
        return self.search.strip()


class RestaurantCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    logo: str = Field(..., min_length=1, description="Logo URL or path")
    status: RestaurantStatus = RestaurantStatus.OPEN


class MealCreate(BaseModel):
    """Body of ``POST /meals``: a meal together with the restaurant serving it."""

    model_config = ConfigDict(extra="forbid")

    foodName: str = Field(..., min_length=1)
    rating: Rating
    imageUrl: str = Field(..., min_length=1)
    restaurant: RestaurantCreate


class MealUpdate(BaseModel):
    """Body of ``PUT /meals/{id}``.

    Every field is optional. Known fields keep their creation rules, and
    unknown keys are kept as-is and written to the document.
    """

    model_config = ConfigDict(extra="allow")

    foodName: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[Rating] = None
    imageUrl: Optional[str] = Field(default=None, min_length=1)
    restaurant: Optional[ObjectIdStr] = None

    @field_validator("foodName", "rating", "imageUrl", "restaurant", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # Only runs for keys present in the body; omitted keys keep the default.
        if v is None:
            raise PydanticCustomError("not_null", "must not be null")
        return v

    @model_validator(mode="after")
    def check_extra_keys(self) -> "MealUpdate":
        for key in self.model_extra or {}:
            if key in _PROTECTED_KEYS or key.startswith("$"):
                raise PydanticCustomError(
                    "protected_key", "field '{key}' cannot be updated", {"key": key}
                )
        return self

    def changes(self) -> Dict[str, Any]:
        """Keys present in the request body, known fields first."""
        data = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }
        data.update(self.model_extra or {})
        return data
