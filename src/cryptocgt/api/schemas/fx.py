from decimal import Decimal

from pydantic import BaseModel


class FxRateResponse(BaseModel):
    rate: Decimal
    source: str
    cached: bool
