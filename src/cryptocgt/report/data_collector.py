"""ReportDataCollector — turns a CGTReport into spreadsheet rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from cryptocgt.domain.models.tax import CGTReport

CENT = Decimal("0.01")


@dataclass
class ReportData:
    """All data needed to write the CGT workbook."""

    # Sheet data — each is a list of row tuples
    events: list[tuple] = field(default_factory=list)
    summary: list[tuple] = field(default_factory=list)
    assets: list[tuple] = field(default_factory=list)


def _money(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def _money_text(value: Decimal) -> str:
    return f"{value.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def _au_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


class ReportDataCollector:
    """Builds the three report sheets: CGT events, tax summary, per-asset summary."""

    def collect(self, report: CGTReport) -> ReportData:
        data = ReportData()
        data.events = self._build_events(report)
        data.summary = self._build_summary(report)
        data.assets = self._build_assets(report)
        return data

    def _build_events(self, report: CGTReport) -> list[tuple]:
        return [
            (
                e.asset,
                _au_date(e.buy_date),
                _au_date(e.sell_date),
                e.holding_days,
                _money(e.cost_base),
                _money(e.sale_proceeds),
                _money(e.capital_gain),
                _yes_no(e.is_long_term),
                _yes_no(e.discount_eligible),
                _money(e.discounted_gain),
                e.exchange,
            )
            for e in report.events
        ]

    def _build_summary(self, report: CGTReport) -> list[tuple]:
        s = report.summary
        t = report.tax
        effective_pct = (t.effective_crypto_rate * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return [
            ("Financial Year", f"FY {report.financial_year}"),
            ("Total Capital Gains", _money_text(s.total_gains)),
            ("Total Capital Losses", _money_text(s.total_losses)),
            ("Net Capital Gain", _money_text(s.net_capital_gain)),
            ("Short-Term Gains", _money_text(s.short_term_gains)),
            ("Long-Term Gains", _money_text(s.long_term_gains)),
            ("CGT Discount Amount", _money_text(s.cgt_discount_amount)),
            ("Taxable Capital Gain", _money_text(s.taxable_capital_gain)),
            ("Carry Forward Loss", _money_text(s.carry_forward_loss)),
            ("", ""),
            ("Tax on Other Income", _money_text(t.tax_on_other_income)),
            ("Tax on Crypto", _money_text(t.tax_on_crypto)),
            ("Medicare Levy", _money_text(t.medicare_levy)),
            ("Total Estimated Tax", _money_text(t.total_tax)),
            ("Effective Crypto Tax Rate", f"{effective_pct}%"),
        ]

    def _build_assets(self, report: CGTReport) -> list[tuple]:
        return [
            (
                a.asset,
                a.trade_count,
                _money(a.total_gains),
                _money(a.total_losses),
                _money(a.net),
                a.avg_holding_days,
            )
            for a in report.assets
        ]
