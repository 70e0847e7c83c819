"""Ledger (credit history) view built from a calculation result"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Tuple
from consigpro_gateway.domain.models import CalculationResult, CategoryCalculation, LineItem

# Display labels, keyed by category id
CATEGORY_LABELS = {
    "loan": "Empréstimo",
    "credit_card": "Cartão Crédito",
    "benefit_card": "Cartão Benefício",
    "other": "Outros",
}

ALERT_NAMES = {
    "loan": "Empréstimo (35%)",
    "credit_card": "Cartão Crédito (5%)",
    "benefit_card": "Cartão Benefício (5%)",
}

DEFAULT_BANK = "Banco"
DEFAULT_CONTRACT = "S/ Nº"
DEFAULT_INSTALLMENT = "N/A"


@dataclass(frozen=True)
class LedgerEntry:
    """One row of the consolidated credit history table"""

    item: LineItem
    category: str
    category_label: str
    rubric_code: str
    bank: str
    contract: str
    installment_index: str


@dataclass(frozen=True)
class NegativeMarginAlert:
    """Category whose commitments exceed its legal limit"""

    category: str
    name: str
    available: Decimal
    limit: Decimal
    used: Decimal


def label_category(description: str) -> str:
    """
    First-match label for the ledger table.

    Looser than the calculator's markers: any "CARTAO CREDITO" rubrica is
    tagged as credit card even without "AMORT", and each item gets one label.
    """
    upper = description.upper()
    if "EMPREST" in upper:
        return "loan"
    if "CARTAO CREDITO" in upper:
        return "credit_card"
    if "CARTAO BENEFICIO" in upper:
        return "benefit_card"
    return "other"


def rubric_code(description: str) -> str:
    """Leading code of a rubrica, e.g. "34228" from "34228 - EMPREST BCO PRIVADOS - PAN" """
    return description.split("-")[0].strip()


def build_ledger(result: CalculationResult) -> List[LedgerEntry]:
    """
    All raw items, largest installment first.

    sorted() is stable, so equal values keep their extraction order.
    """
    ordered = sorted(result.raw_items, key=lambda i: i.value, reverse=True)

    entries = []
    for item in ordered:
        category = label_category(item.description)
        entries.append(
            LedgerEntry(
                item=item,
                category=category,
                category_label=CATEGORY_LABELS[category],
                rubric_code=rubric_code(item.description),
                bank=item.bank or DEFAULT_BANK,
                contract=item.contract or DEFAULT_CONTRACT,
                installment_index=item.installment_index or DEFAULT_INSTALLMENT,
            )
        )
    return entries


def categories(result: CalculationResult) -> List[Tuple[str, CategoryCalculation]]:
    """Categories in display order"""
    return [
        ("loan", result.loan),
        ("credit_card", result.credit_card),
        ("benefit_card", result.benefit_card),
    ]


def negative_alerts(result: CalculationResult) -> List[NegativeMarginAlert]:
    """Alerts for every category with a negative available margin"""
    return [
        NegativeMarginAlert(
            category=key,
            name=ALERT_NAMES[key],
            available=calc.available,
            limit=calc.limit,
            used=calc.used,
        )
        for key, calc in categories(result)
        if calc.is_negative
    ]
