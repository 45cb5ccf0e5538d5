"""Resident individual income tax brackets, keyed by financial year."""

import logging
from decimal import Decimal

from cryptocgt.domain.models.tax import TaxBracket

logger = logging.getLogger(__name__)


def _table(rows: list[tuple[int, int | None, str]]) -> tuple[TaxBracket, ...]:
    return tuple(
        TaxBracket(min=Decimal(lo), max=None if hi is None else Decimal(hi), rate=Decimal(rate))
        for lo, hi, rate in rows
    )


_PRE_STAGE_3 = [
    (0, 18200, "0"),
    (18201, 45000, "0.19"),
    (45001, 120000, "0.325"),
    (120001, 180000, "0.37"),
    (180001, None, "0.45"),
]

_STAGE_3 = [
    (0, 18200, "0"),
    (18201, 45000, "0.16"),
    (45001, 135000, "0.30"),
    (135001, 190000, "0.37"),
    (190001, None, "0.45"),
]

TAX_BRACKETS: dict[str, tuple[TaxBracket, ...]] = {
    "2022-23": _table(_PRE_STAGE_3),
    "2023-24": _table(_PRE_STAGE_3),
    "2024-25": _table(_STAGE_3),
    "2025-26": _table(_STAGE_3),
}

LATEST_FINANCIAL_YEAR = max(TAX_BRACKETS)


def get_brackets_for_fy(financial_year: str) -> tuple[TaxBracket, ...]:
    """Bracket table for a FY, falling back to the latest known table for unknown labels."""
    brackets = TAX_BRACKETS.get(financial_year)
    if brackets is None:
        logger.info("No tax brackets for FY %s, using FY %s", financial_year, LATEST_FINANCIAL_YEAR)
        brackets = TAX_BRACKETS[LATEST_FINANCIAL_YEAR]
    return brackets
