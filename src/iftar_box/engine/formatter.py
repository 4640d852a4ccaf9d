"""Display formatting for currency amounts."""
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def fmt(amount) -> str:
    """
    Render an amount for display.

    Whole amounts have no decimal point (``25``); anything else gets
    exactly two decimals (``22.5`` -> ``"22.50"``).
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if value == value.to_integral_value():
        return str(int(value))
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))


def fmt_money(amount, currency: str = "CAD") -> str:
    """Render an amount with the dollar sign and currency code, e.g. ``$22.50 CAD``."""
    text = fmt(amount)
    if text.startswith("-"):
        return f"-${text[1:]} {currency}"
    return f"${text} {currency}"
