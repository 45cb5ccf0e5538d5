"""Progressive income tax with crypto gains stacked on top of other income."""

from collections.abc import Sequence
from decimal import Decimal

from cryptocgt.accounting.brackets import get_brackets_for_fy
from cryptocgt.domain.models.tax import BracketBreakdown, TaxBracket, TaxBracketResult

MEDICARE_LEVY_RATE = Decimal("0.02")


def bracket_width(bracket: TaxBracket, remaining: Decimal) -> Decimal:
    """Dollars of income a bracket can hold.

    Brackets are inclusive on both ends (18,201 - 45,000), so a bracket's width
    is measured from the previous bracket's max to avoid counting the boundary
    dollar twice. The unbounded top bracket holds whatever income remains.
    """
    if bracket.max is None:
        return remaining
    lower = Decimal(0) if bracket.min == 0 else bracket.min - 1
    return bracket.max - lower


def calculate_progressive_tax(income: Decimal | float, brackets: Sequence[TaxBracket]) -> Decimal:
    """Tax on income walking brackets in ascending order."""
    remaining = Decimal(str(income))
    tax = Decimal(0)
    for bracket in brackets:
        if remaining <= 0:
            break
        taxable = min(remaining, bracket_width(bracket, remaining))
        tax += taxable * bracket.rate
        remaining -= taxable
    return tax


def _range_label(bracket: TaxBracket) -> str:
    if bracket.max is None:
        return f"${int(bracket.min):,}+"
    return f"${int(bracket.min):,} - ${int(bracket.max):,}"


def _bracket_breakdown(
    other_income: Decimal,
    crypto_income: Decimal,
    brackets: Sequence[TaxBracket],
) -> list[BracketBreakdown]:
    """Split each bracket between the two streams: other income fills first, crypto takes the rest."""
    rows: list[BracketBreakdown] = []
    remaining_other = other_income
    remaining_crypto = crypto_income

    for bracket in brackets:
        if remaining_other <= 0 and remaining_crypto <= 0:
            break

        width = bracket_width(bracket, remaining_other + remaining_crypto)

        other_in_bracket = min(remaining_other, width)
        remaining_other -= other_in_bracket

        crypto_in_bracket = min(remaining_crypto, max(Decimal(0), width - other_in_bracket))
        remaining_crypto -= crypto_in_bracket

        if other_in_bracket > 0 or crypto_in_bracket > 0:
            rows.append(BracketBreakdown(
                range=_range_label(bracket),
                rate=bracket.rate,
                other_income_in_bracket=other_in_bracket,
                crypto_income_in_bracket=crypto_in_bracket,
                tax_on_other=other_in_bracket * bracket.rate,
                tax_on_crypto=crypto_in_bracket * bracket.rate,
            ))

    return rows


def calculate_tax(
    other_income: Decimal | float,
    crypto_taxable_gain: Decimal | float,
    financial_year: str,
) -> TaxBracketResult:
    """Tax payable on other income plus the crypto taxable gain for a financial year.

    Crypto tax is marginal: tax on (other + crypto) minus tax on other alone.
    A negative crypto gain contributes no income and is not a deduction.
    The Medicare levy is 2% of combined income.
    """
    other = Decimal(str(other_income))
    if other < 0:
        raise ValueError(f"Other income must be non-negative, got {other_income}")
    crypto_gain = Decimal(str(crypto_taxable_gain))
    crypto = max(Decimal(0), crypto_gain)

    brackets = get_brackets_for_fy(financial_year)
    total_income = other + crypto

    tax_on_total = calculate_progressive_tax(total_income, brackets)
    tax_on_other = calculate_progressive_tax(other, brackets)
    tax_on_crypto = tax_on_total - tax_on_other
    medicare_levy = total_income * MEDICARE_LEVY_RATE

    effective_rate = tax_on_crypto / crypto_gain if crypto_gain > 0 else Decimal(0)

    return TaxBracketResult(
        tax_on_other_income=tax_on_other,
        tax_on_crypto=tax_on_crypto,
        medicare_levy=medicare_levy,
        total_tax=tax_on_total + medicare_levy,
        effective_crypto_rate=effective_rate,
        bracket_breakdown=_bracket_breakdown(other, crypto, brackets),
    )
