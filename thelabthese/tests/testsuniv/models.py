from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Annotated

from django.db import models
import pydantic

from thelabthese.codecs import TheseJSON
from thelabthese.these import These
import thelabthese.fields


class Color(StrEnum):
    RED = "red"
    BLUE = "blue"


class Listing(pydantic.BaseModel):
    """A price, a free-text label, or both"""

    sku: str
    pricing: Annotated[These[Decimal, str], TheseJSON(Decimal, str)]
    availability: Annotated[
        These[datetime, Color],
        TheseJSON(datetime, Color),
    ] | None = None


class Offer(models.Model):
    terms = thelabthese.fields.TheseField(int, str)


class NullableOffer(models.Model):
    terms = thelabthese.fields.TheseField(Decimal, list[str], null=True)
