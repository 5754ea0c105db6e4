from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses the snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def quantize(value: Optional[Decimal], places: int) -> Optional[Decimal]:
    """Round half-up to a fixed number of fractional digits."""
    if value is None:
        return None
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def positive_places(value: Optional[Decimal], places: int) -> Optional[Decimal]:
    """Quantize and require the rounded value to stay above zero."""
    rounded = quantize(value, places)
    if rounded is not None and rounded <= 0:
        raise ValueError(f"must be greater than 0 at {places} decimal places")
    return rounded
