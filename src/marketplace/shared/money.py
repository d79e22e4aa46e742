"""Money arithmetic for checkout totals and commission splits.

Amounts are stored as floats (peso values with centavos); arithmetic that must
conserve cents goes through Decimal.
"""

from decimal import ROUND_HALF_UP, Decimal

# Platform cut taken from every liquidated payment
COMMISSION_RATE = 0.10

_CENT = Decimal("0.01")


def to_cents(value) -> Decimal:
    """Quantize a numeric value to two decimal places."""
    return Decimal(str(value or 0)).quantize(_CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price: float, quantity: int) -> float:
    return float(to_cents(Decimal(str(unit_price)) * int(quantity)))


def lines_total(lines) -> float:
    """Sum of price * quantity over dicts or objects exposing price and quantity.

    A missing quantity counts as one unit.
    """
    total = Decimal("0")
    for line in lines:
        price = line["price"] if isinstance(line, dict) else line.price
        quantity = line.get("quantity") if isinstance(line, dict) else line.quantity
        total += Decimal(str(price or 0)) * int(quantity or 1)
    return float(to_cents(total))


def split_commission(amount: float, rate: float = COMMISSION_RATE) -> tuple[float, float]:
    """Split an amount into (admin_commission, seller_earnings).

    The commission is rounded half-up to the cent and the seller receives the
    exact remainder, so the two parts always add back up to the amount.
    """
    total = to_cents(amount)
    commission = (total * Decimal(str(rate))).quantize(_CENT, rounding=ROUND_HALF_UP)
    earnings = total - commission
    return float(commission), float(earnings)
