from enum import Enum


class MarketType(str, Enum):
    SPOT = "spot"
    PERP = "perp"
    PRE_MARKET = "pre-market"
    SOL = "sol"


class Term(str, Enum):
    """Holding-period class of a CGT event. LONG means held more than 365 days."""

    SHORT = "SHORT"
    LONG = "LONG"
