"""Australian financial year (1 July - 30 June) helpers."""

import re
from collections.abc import Iterable
from datetime import date, datetime

from cryptocgt.domain.models.tax import Trade
from cryptocgt.exceptions import InvalidFinancialYearError

FY_START_MONTH = 7  # July
_LABEL_RE = re.compile(r"^(\d{4})-(\d{2})$")


def resolve_label(when: date) -> str:
    """Return the FY label (e.g. "2024-25") that a date falls within."""
    if when.month >= FY_START_MONTH:
        start_year = when.year
    else:
        start_year = when.year - 1
    return f"{start_year}-{(start_year + 1) % 100:02d}"


def resolve_boundaries(label: str) -> tuple[datetime, datetime]:
    """Return (start, end) for a FY label: 1 July 00:00 to 30 June 23:59:59.999."""
    match = _LABEL_RE.match(label.strip()) if isinstance(label, str) else None
    if match is None:
        raise InvalidFinancialYearError(f"Invalid financial year label: {label!r}")

    start_year = int(match.group(1))
    start = datetime(start_year, FY_START_MONTH, 1)
    end = datetime(start_year + 1, 6, 30, 23, 59, 59, 999000)
    return start, end


def list_available_labels(trades: Iterable[Trade]) -> list[str]:
    """Scan closed trades' exit dates and return the sorted FY labels they cover.

    Open trades and trades whose exit date could not be parsed are skipped.
    """
    labels = {resolve_label(t.exit_date) for t in trades if t.is_closed}
    return sorted(labels)
