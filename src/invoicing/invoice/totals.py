"""Monetary reconciliation for invoice lines and order totals.

Prices arrive as nullable floats. A line's explicit total wins when it is a
usable number; otherwise the line is priced as ``unit_price * qty`` with
missing operands counted as zero. Nothing here ever yields NaN.
"""

import math
from collections.abc import Iterable

from invoicing.order.order import OrderItem

CURRENCY_SUFFIX = "грн"

_GROUP_SEPARATOR = "\u00a0"
_DECIMAL_SEPARATOR = ","
_MAX_FRACTION_DIGITS = 3


def _is_amount(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def line_total(item: OrderItem) -> float:
    """Return the reconciled total of a single invoice line."""
    if _is_amount(item.line_total):
        return item.line_total

    total = (item.unit_price or 0) * (item.qty or 0)
    return total if _is_amount(total) else 0


def order_total(items: Iterable[OrderItem] | None) -> float:
    """Sum of reconciled line totals; 0 for an empty collection."""
    return math.fsum(line_total(item) for item in items or [])


def format_money(amount) -> str:
    """Format ``amount`` the way the shop prints prices, e.g. ``1 234,5 грн`` with no-break spaces.

    Returns an empty string for anything that is not a finite number.
    """
    if not _is_amount(amount):
        return ""

    whole, _, fraction = f"{abs(amount):,.{_MAX_FRACTION_DIGITS}f}".partition(".")
    fraction = fraction.rstrip("0")

    text = whole.replace(",", _GROUP_SEPARATOR)
    if fraction:
        text = f"{text}{_DECIMAL_SEPARATOR}{fraction}"
    if amount < 0 and text.strip("0" + _GROUP_SEPARATOR + _DECIMAL_SEPARATOR):
        text = f"-{text}"

    return f"{text}{_GROUP_SEPARATOR}{CURRENCY_SUFFIX}"
