"""Margin calculator - core business logic for consignment margins"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence, Tuple
from consigpro_gateway.domain.models import (
    CalculationResult,
    CategoryCalculation,
    ExtractedData,
    LineItem,
)

# Share of Base IR each category may commit
LOAN_RATE = Decimal("0.35")
CREDIT_CARD_RATE = Decimal("0.05")
BENEFIT_CARD_RATE = Decimal("0.05")

LOAN_MARKER = "EMPREST"
CREDIT_CARD_MARKER = "AMORT CARTAO CREDITO"
BENEFIT_CARD_MARKER = "AMORT CARTAO BENEFICIO"

# Anything above -0.01 is rounding noise, not an overdrawn margin
NEGATIVE_TOLERANCE = Decimal("-0.01")

CENT = Decimal("0.01")
ZERO = Decimal("0")


def round2(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def matches(item: LineItem, marker: str) -> bool:
    """Case-insensitive substring test on the item's rubrica"""
    return marker in item.description.upper().strip()


def calculate_category(
    base_ir: Decimal,
    items: Iterable[LineItem],
    marker: str,
    rate: Decimal,
) -> CategoryCalculation:
    """
    Compute usage and availability for one category.

    Order matters for parity with the payroll figures:
    - limit is rounded first
    - used is left unrounded
    - available = round2(limit - used)
    """
    matching: Tuple[LineItem, ...] = tuple(i for i in items if matches(i, marker))
    used = sum((i.value for i in matching), ZERO)
    limit = round2(base_ir * rate)
    available = round2(limit - used)

    return CategoryCalculation(
        used=used,
        items=matching,
        limit=limit,
        available=available,
        is_negative=available < NEGATIVE_TOLERANCE,
    )


def calculate_margins(
    base_ir: Optional[Decimal],
    items: Optional[Sequence[LineItem]],
) -> CalculationResult:
    """
    Main entry point: classify line items and derive the three margins.

    Categories are evaluated independently, so an item whose rubrica carries
    more than one marker counts towards every matching category.
    Missing base_ir is treated as 0 and missing items as an empty list.
    """
    base = base_ir if base_ir is not None else ZERO
    raw_items = tuple(items or ())

    return CalculationResult(
        base_ir=base,
        loan=calculate_category(base, raw_items, LOAN_MARKER, LOAN_RATE),
        credit_card=calculate_category(base, raw_items, CREDIT_CARD_MARKER, CREDIT_CARD_RATE),
        benefit_card=calculate_category(base, raw_items, BENEFIT_CARD_MARKER, BENEFIT_CARD_RATE),
        raw_items=raw_items,
    )


def calculate_from_extracted(data: ExtractedData) -> CalculationResult:
    """Re-derive the margins after any change to the held ExtractedData"""
    return calculate_margins(data.base_ir, data.items)


def usage_percent(calc: CategoryCalculation) -> Decimal:
    """Share of the limit already used, capped at 100 (0 when there is no limit)"""
    if calc.limit <= 0:
        return ZERO
    return round2(min(calc.used / calc.limit * 100, Decimal("100")))
