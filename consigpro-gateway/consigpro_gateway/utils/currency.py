"""Currency formatting utilities"""

from decimal import Decimal, ROUND_HALF_UP


def format_brl(amount: Decimal) -> str:
    """
    Format an amount the way pt-BR displays Brazilian reais.

    Examples:
        Decimal("1234.5")  -> "R$ 1.234,50"
        Decimal("-10")     -> "-R$ 10,00"
    """
    cents = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    integer, _, fraction = f"{abs(cents):.2f}".partition(".")

    # Group thousands with "." and use "," before the cents
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}R$ {grouped},{fraction}"
