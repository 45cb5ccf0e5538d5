"""Domain types for Australian CGT calculation on closed crypto trades."""

import logging
from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cryptocgt.config import settings
from cryptocgt.domain.enums.tax import MarketType, Term

logger = logging.getLogger(__name__)

# Tried in order after ISO-8601; spreadsheet exports use Australian day-first dates
_DATE_FORMATS = ("%d/%m/%Y %H:%M:%S", "%d/%m/%Y %H:%M", "%d/%m/%Y", "%Y/%m/%d")


def parse_trade_date(value: object) -> datetime | None:
    """Coerce a trade date to a naive datetime.

    Aware datetimes are converted to the reporting timezone (Australian local
    time by default) before tzinfo is dropped; naive values are taken as
    already local. Returns None for missing or unparseable values so the
    trade simply drops out of FY derivation.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = _parse_date_string(value.strip())
    else:
        parsed = None

    if parsed is None:
        logger.debug("Ignoring unparseable trade date: %r", value)
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(settings.report_timezone)).replace(tzinfo=None)
    return parsed


def _parse_date_string(text: str) -> datetime | None:
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


class Trade(BaseModel):
    """A buy/exit pair from the trade journal. No exit date means still open.

    Accepts either the Python field names or the journal's column headings
    ("Spot Pair", "Buy Date", ...).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    asset: str = Field(alias="Spot Pair")
    buy_date: datetime | None = Field(default=None, alias="Buy Date")
    exit_date: datetime | None = Field(default=None, alias="Exit Date")
    buy_price: Decimal | None = Field(default=None, alias="Buy Price")
    buy_quantity: Decimal | None = Field(default=None, alias="Buy Quantity")
    buy_value: Decimal | None = Field(default=None, alias="Buy Value")  # Total, USD
    exit_price: Decimal | None = Field(default=None, alias="Exit Price")
    exit_quantity: Decimal | None = Field(default=None, alias="Exit Quantity")
    exit_value: Decimal | None = Field(default=None, alias="Exit Value")  # Total, USD
    profit_loss: Decimal | None = Field(default=None, alias="Profit/Loss $")
    exchange: str = Field(default="", alias="Exchange")
    market_type: MarketType = MarketType.SPOT

    @field_validator("buy_date", "exit_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> datetime | None:
        return parse_trade_date(value)

    @field_validator("exchange", mode="before")
    @classmethod
    def _coerce_exchange(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def is_closed(self) -> bool:
        """Fully or partially exited: has an exit date and a positive exit quantity."""
        return self.exit_date is not None and self.exit_quantity is not None and self.exit_quantity > 0


class CGTEvent(BaseModel):
    """A CGT event derived from one closed trade, in the reporting currency."""

    asset: str
    buy_date: datetime
    sell_date: datetime
    holding_days: int  # ceil(sell - buy) in days, never negative
    cost_base: Decimal
    sale_proceeds: Decimal
    capital_gain: Decimal  # positive = gain, negative = loss
    gain_pct: Decimal = Decimal(0)  # capital_gain / cost_base * 100, 0 when cost base is 0
    is_long_term: bool  # held > 365 days
    discount_eligible: bool  # long-term gain, never a loss
    discounted_gain: Decimal  # after 50% discount (only for eligible gains)
    exchange: str = ""

    @property
    def term(self) -> Term:
        return Term.LONG if self.is_long_term else Term.SHORT


class TaxSummary(BaseModel):
    """Gain/loss totals for a financial year after loss offset and CGT discount.

    taxable_capital_gain and carry_forward_loss are never both non-zero.
    """

    total_gains: Decimal = Decimal(0)
    total_losses: Decimal = Decimal(0)  # Magnitude
    net_capital_gain: Decimal = Decimal(0)
    short_term_gains: Decimal = Decimal(0)
    long_term_gains: Decimal = Decimal(0)
    cgt_discount_amount: Decimal = Decimal(0)
    taxable_capital_gain: Decimal = Decimal(0)
    carry_forward_loss: Decimal = Decimal(0)
    short_term_trade_count: int = 0
    long_term_trade_count: int = 0


class TaxBracket(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Decimal  # Inclusive
    max: Decimal | None = None  # Inclusive; None = unbounded top bracket
    rate: Decimal


class BracketBreakdown(BaseModel):
    range: str
    rate: Decimal
    other_income_in_bracket: Decimal
    crypto_income_in_bracket: Decimal
    tax_on_other: Decimal
    tax_on_crypto: Decimal


class TaxBracketResult(BaseModel):
    tax_on_other_income: Decimal
    tax_on_crypto: Decimal
    medicare_levy: Decimal
    total_tax: Decimal
    effective_crypto_rate: Decimal
    bracket_breakdown: list[BracketBreakdown] = []


class MonthlyGain(BaseModel):
    month: str  # "Jul" .. "Jun"
    gains: Decimal = Decimal(0)
    losses: Decimal = Decimal(0)  # Magnitude
    net: Decimal = Decimal(0)
    count: int = 0


class AssetSummary(BaseModel):
    asset: str
    trade_count: int
    total_gains: Decimal
    total_losses: Decimal  # Magnitude
    net: Decimal
    avg_holding_days: int


class WashSaleWarning(BaseModel):
    """A loss sale followed by a same-asset rebuy inside the wash-sale window."""

    asset: str
    sell_date: datetime
    loss_amount: Decimal  # Magnitude
    rebuy_date: datetime
    days_between: int


class CGTReport(BaseModel):
    """Everything computed for one financial year."""

    financial_year: str
    usd_aud_rate: Decimal
    other_income: Decimal
    carry_forward_loss_input: Decimal
    events: list[CGTEvent] = []
    summary: TaxSummary
    tax: TaxBracketResult
    monthly: list[MonthlyGain] = []
    assets: list[AssetSummary] = []
    wash_sales: list[WashSaleWarning] = []
