from cryptocgt.domain.enums.tax import MarketType, Term

__all__ = [
    "MarketType",
    "Term",
]
