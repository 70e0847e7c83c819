"""Unit tests for BRL currency formatting"""

from decimal import Decimal
from consigpro_gateway.utils.currency import format_brl


def test_format_brl_thousands_and_cents():
    assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_brl(Decimal("1234567.89")) == "R$ 1.234.567,89"


def test_format_brl_small_and_zero():
    assert format_brl(Decimal("0")) == "R$ 0,00"
    assert format_brl(Decimal("50.005")) == "R$ 50,01"


def test_format_brl_negative():
    assert format_brl(Decimal("-10")) == "-R$ 10,00"
    assert format_brl(Decimal("-1500.25")) == "-R$ 1.500,25"
