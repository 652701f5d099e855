"""
Agent pricing calculations.

Plain float arithmetic with no rounding and no range checks: negative or
out-of-range rates and NaN inputs flow straight through to the result.
Callers that need business-plausible bounds check them before calling.
"""

from typing import Any, Iterable

from .models import PricingResult, read_field

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "CA$",
    "NZD": "NZ$",
}

# ISO 4217 currencies with no minor unit
_ZERO_DECIMAL_CURRENCIES = {
    "BIF", "CLP", "DJF", "GNF", "ISK", "JPY", "KMF", "KRW",
    "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF",
}


def compute_agent_pricing(
    base_price: float,
    commission_rate: float = 0,
    discount_rate: float = 0,
    fees: float = 0,
    tax_rate: float = 0,
    currency: str = "USD",
) -> PricingResult:
    """
    Build the itemized agent pricing breakdown for a base price.

    The discount comes off the base price first, tax is charged on the
    discounted price, fees are added flat, and the agent commission is a
    share of the resulting total.

    Args:
        base_price: Price before any adjustment.
        commission_rate: Agent commission in percent of the total.
        discount_rate: Agent discount in percent of the base price.
        fees: Flat fees added after the discount.
        tax_rate: Tax in percent of the discounted price.
        currency: Currency code carried through to the result.

    Returns:
        PricingResult where ``total = subtotal - agent_discount + fees + taxes``
        and ``net_price = total - agent_commission``.
    """
    subtotal = base_price
    agent_discount = subtotal * (discount_rate / 100)
    discounted_price = subtotal - agent_discount
    taxes = discounted_price * (tax_rate / 100)
    total = discounted_price + fees + taxes
    agent_commission = total * (commission_rate / 100)
    net_price = total - agent_commission

    return PricingResult(
        subtotal=subtotal,
        fees=fees,
        taxes=taxes,
        total=total,
        currency=currency,
        agent_commission=agent_commission,
        agent_discount=agent_discount,
        net_price=net_price,
    )


def sum_quantity_pricing(
    quantities: Iterable[Any],
    price_table: Iterable[Any],
    use_agent_pricing: bool = False,
) -> float:
    """
    Total price of the selected quantities against a session price table.

    Lines whose option is missing from the table contribute nothing. Lines
    and entries may be models or camelCase mappings.
    """
    price_table = list(price_table)
    total = 0
    for quantity in quantities:
        option_id = read_field(quantity, "option_id")
        entry = next(
            (p for p in price_table if read_field(p, "option_id") == option_id),
            None,
        )
        if entry is None:
            continue

        agent_price = read_field(entry, "agent_price")
        if use_agent_pricing and agent_price is not None:
            unit_price = agent_price
        else:
            unit_price = read_field(entry, "price")

        total += unit_price * read_field(quantity, "value")
    return total


def format_price(amount: float, currency: str = "USD") -> str:
    """Format an amount for display, e.g. ``$1,234.50`` or ``CHF 80.00``."""
    code = currency.upper()
    decimals = 0 if code in _ZERO_DECIMAL_CURRENCIES else 2
    prefix = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{prefix}{abs(amount):,.{decimals}f}"
