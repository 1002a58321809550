from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


CENT = Decimal("0.01")


def money_to_json(value: Decimal) -> float:
    """
    Render an amount as a JSON number rounded to whole cents.

    A float reproduces any decimal of up to 15 significant digits, so amounts
    below 10**13 keep every cent in the JSON output.
    """
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


# money stays Decimal in python and is rendered as a JSON number
Money = Annotated[Decimal, PlainSerializer(money_to_json, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base schema whose JSON keys are camelCase while python attributes stay snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
