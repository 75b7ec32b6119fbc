"""Money parsing and rounding helpers.

Pure functions. No I/O.
"""

from decimal import Decimal, InvalidOperation, Overflow, ROUND_HALF_UP, getcontext, localcontext

WHOLE = Decimal("1")

# Largest accepted magnitude is below 10**16 (ten quadrillion dollars).
MAX_MONEY_EXPONENT = 15


def parse_money(value) -> Decimal | None:
    """Parse a monetary amount from form text or a number.

    Accepts "$300,000", " 150000 ", 1500.5, Decimal("42"). Returns None for
    empty, non-numeric, NaN, infinite or implausibly large input.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:].strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None

    if not amount.is_finite():
        return None
    if amount and amount.adjusted() > MAX_MONEY_EXPONENT:
        return None
    return amount


def to_decimal(value) -> Decimal:
    """Coerce an already-numeric value to Decimal without validation."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def money_context():
    """Decimal context where overflow gives Infinity and invalid results give NaN.

    Arithmetic on unvalidated amounts then yields non-finite values that
    callers check with ``is_finite()`` instead of raising.
    """
    ctx = getcontext().copy()
    ctx.traps[Overflow] = False
    ctx.traps[InvalidOperation] = False
    return localcontext(ctx)


def round_whole(value: Decimal) -> int:
    """Round half away from zero to an int."""
    if value.as_tuple().exponent >= 0:
        # Already integral; quantize would exceed the context precision.
        return int(value)
    return int(value.quantize(WHOLE, ROUND_HALF_UP))
