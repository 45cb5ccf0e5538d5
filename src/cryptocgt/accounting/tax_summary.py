"""Loss offset and CGT discount — aggregates CGT events into a TaxSummary."""

from collections.abc import Iterable
from decimal import Decimal

from cryptocgt.accounting.cgt import CGT_DISCOUNT
from cryptocgt.domain.enums.tax import Term
from cryptocgt.domain.models.tax import CGTEvent, TaxSummary


def calculate_tax_summary(
    events: Iterable[CGTEvent],
    carry_forward_loss: Decimal | float = 0,
) -> TaxSummary:
    """Aggregate CGT events plus a prior-year carry-forward loss.

    Losses (current and carried forward) are offset against short-term gains
    first, then long-term gains, so the discount-eligible residual is as large
    as possible. The 50% discount applies to the long-term residual only.
    A net result of zero or below is carried forward and nothing is taxable.
    """
    carried_in = Decimal(str(carry_forward_loss))
    if carried_in < 0:
        raise ValueError(f"Carry-forward loss must be non-negative, got {carry_forward_loss}")

    summary = TaxSummary()

    for e in events:
        if e.term == Term.LONG:
            summary.long_term_trade_count += 1
        else:
            summary.short_term_trade_count += 1

        if e.capital_gain >= 0:
            summary.total_gains += e.capital_gain
            if e.term == Term.LONG:
                summary.long_term_gains += e.capital_gain
            else:
                summary.short_term_gains += e.capital_gain
        else:
            summary.total_losses += abs(e.capital_gain)

    summary.net_capital_gain = summary.total_gains - summary.total_losses
    net_before_discount = summary.net_capital_gain - carried_in

    if net_before_discount <= 0:
        summary.carry_forward_loss = abs(net_before_discount)
        return summary

    remaining_losses = summary.total_losses + carried_in
    short_term = summary.short_term_gains
    long_term = summary.long_term_gains

    short_offset = min(remaining_losses, short_term)
    short_term -= short_offset
    remaining_losses -= short_offset

    long_offset = min(remaining_losses, long_term)
    long_term -= long_offset

    summary.cgt_discount_amount = long_term * CGT_DISCOUNT
    summary.taxable_capital_gain = short_term + (long_term - summary.cgt_discount_amount)
    return summary
