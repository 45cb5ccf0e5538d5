"""TaxEngine — orchestrates CGT events, loss offset, income tax and reporting aggregates."""

import logging
from collections.abc import Sequence
from decimal import Decimal

from cryptocgt.accounting.cgt import get_events_for_fy
from cryptocgt.accounting.financial_year import list_available_labels
from cryptocgt.accounting.progressive_tax import calculate_tax
from cryptocgt.accounting.tax_summary import calculate_tax_summary
from cryptocgt.accounting.wash_sale import WASH_SALE_WINDOW_DAYS, detect_wash_sales
from cryptocgt.domain.models.tax import CGTReport, Trade
from cryptocgt.report.aggregations import asset_summaries, monthly_gains

logger = logging.getLogger(__name__)


class TaxEngine:
    """Compute a full CGT report for one financial year. Pure: no I/O, no state between runs."""

    def __init__(self, wash_sale_window_days: int = WASH_SALE_WINDOW_DAYS) -> None:
        self._wash_sale_window_days = wash_sale_window_days

    def available_financial_years(self, trades: Sequence[Trade]) -> list[str]:
        return list_available_labels(trades)

    def calculate(
        self,
        trades: Sequence[Trade],
        financial_year: str,
        usd_aud_rate: Decimal | float = 1,
        other_income: Decimal | float = 0,
        carry_forward_loss: Decimal | float = 0,
    ) -> CGTReport:
        """Run the full calculation for a financial year."""
        # 1. Closed trades in the FY → CGT events (sorted by sell date)
        events = get_events_for_fy(trades, financial_year, usd_aud_rate)

        # 2. Loss offset + CGT discount
        summary = calculate_tax_summary(events, carry_forward_loss)

        # 3. Income tax with crypto stacked on top of other income
        tax = calculate_tax(other_income, summary.taxable_capital_gain, financial_year)

        # 4. Reporting aggregates + advisory wash-sale scan over the full history
        monthly = monthly_gains(events)
        assets = asset_summaries(events)
        wash_sales = detect_wash_sales(events, trades, self._wash_sale_window_days)

        logger.info(
            "FY %s: %d CGT events, taxable gain %s, carry-forward loss %s, %d wash-sale warnings",
            financial_year,
            len(events),
            summary.taxable_capital_gain,
            summary.carry_forward_loss,
            len(wash_sales),
        )

        return CGTReport(
            financial_year=financial_year,
            usd_aud_rate=Decimal(str(usd_aud_rate)),
            other_income=Decimal(str(other_income)),
            carry_forward_loss_input=Decimal(str(carry_forward_loss)),
            events=events,
            summary=summary,
            tax=tax,
            monthly=monthly,
            assets=assets,
            wash_sales=wash_sales,
        )
