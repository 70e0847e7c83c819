"""Unit tests for the credit history (ledger) view"""

from decimal import Decimal
from consigpro_gateway.domain.models import LineItem
from consigpro_gateway.domain.margin import calculate_margins
from consigpro_gateway.domain.ledger import (
    build_ledger,
    label_category,
    negative_alerts,
    rubric_code,
)


def test_build_ledger_sorted_by_value_desc():
    """Largest installment first"""
    items = [
        LineItem(description="EMPREST A", value=Decimal("10")),
        LineItem(description="EMPREST B", value=Decimal("300")),
        LineItem(description="EMPREST C", value=Decimal("45.50")),
    ]
    ledger = build_ledger(calculate_margins(Decimal("1000"), items))

    assert [e.item.description for e in ledger] == ["EMPREST B", "EMPREST C", "EMPREST A"]


def test_build_ledger_ties_keep_extraction_order():
    """Stable sort for equal installments"""
    items = [
        LineItem(description="FIRST", value=Decimal("50")),
        LineItem(description="SECOND", value=Decimal("50")),
    ]
    ledger = build_ledger(calculate_margins(Decimal("1000"), items))

    assert [e.item.description for e in ledger] == ["FIRST", "SECOND"]


def test_build_ledger_display_defaults():
    """Missing bank/contract/installment get placeholder text"""
    ledger = build_ledger(
        calculate_margins(Decimal("1000"), [LineItem(description="34228 - EMPREST BCO", value=Decimal("1"))])
    )
    entry = ledger[0]

    assert entry.bank == "Banco"
    assert entry.contract == "S/ Nº"
    assert entry.installment_index == "N/A"
    assert entry.rubric_code == "34228"
    assert entry.category == "loan"
    assert entry.category_label == "Empréstimo"


def test_build_ledger_keeps_extracted_fields(sample_items):
    ledger = build_ledger(calculate_margins(Decimal("1000"), sample_items))
    loan = ledger[0]

    assert loan.bank == "PAN"
    assert loan.contract == "312456"
    assert loan.installment_index == "44/96"


def test_build_ledger_empty():
    assert build_ledger(calculate_margins(Decimal("1000"), [])) == []


def test_label_category_first_match():
    """Loan wins over card markers; card labels don't require AMORT"""
    assert label_category("EMPREST AMORT CARTAO CREDITO") == "loan"
    assert label_category("RESERVA CARTAO CREDITO") == "credit_card"
    assert label_category("amort cartao beneficio") == "benefit_card"
    assert label_category("PENSAO ALIMENTICIA") == "other"


def test_rubric_code():
    assert rubric_code("34228 - EMPREST BCO PRIVADOS - PAN") == "34228"
    assert rubric_code("SEM CODIGO") == "SEM CODIGO"


def test_negative_alerts_only_for_negative_categories(sample_items):
    """Only the credit card is over its limit in the sample"""
    alerts = negative_alerts(calculate_margins(Decimal("1000.00"), sample_items))

    assert len(alerts) == 1
    assert alerts[0].category == "credit_card"
    assert alerts[0].name == "Cartão Crédito (5%)"
    assert alerts[0].available == Decimal("-10.00")
    assert alerts[0].limit == Decimal("50.00")
    assert alerts[0].used == Decimal("60.00")


def test_negative_alerts_none_when_within_limits():
    result = calculate_margins(Decimal("1000"), [LineItem(description="EMPREST", value=Decimal("100"))])
    assert negative_alerts(result) == []
