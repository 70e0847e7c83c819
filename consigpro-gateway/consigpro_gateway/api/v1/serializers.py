"""Conversions between domain objects and API schemas"""

from decimal import Decimal
from typing import Iterable, List

from consigpro_gateway.api.v1.schemas import (
    CalculationResultSchema,
    CategoryCalculationSchema,
    CategorySummarySchema,
    DashboardResponse,
    ExtractedDataSchema,
    IdentityBanner,
    LedgerEntrySchema,
    LedgerResponse,
    LineItemSchema,
    MoneyDisplay,
    NegativeAlertSchema,
)
from consigpro_gateway.domain.ledger import build_ledger, categories, negative_alerts
from consigpro_gateway.domain.margin import usage_percent
from consigpro_gateway.domain.models import (
    CalculationResult,
    CategoryCalculation,
    ExtractedData,
    LineItem,
    PayslipIdentity,
)
from consigpro_gateway.utils.currency import format_brl

SUMMARY_LABELS = {
    "loan": "Margem 35% (Empréstimo)",
    "credit_card": "Margem 5% (Cartão)",
    "benefit_card": "Margem 5% (Benefício)",
}

DEFAULT_SERVIDOR = "Servidor Identificado"
DEFAULT_COMPETENCIA = "--"


def _decimal(value: float) -> Decimal:
    # str() keeps the literal the client sent (50.005 stays 50.005)
    return Decimal(str(value))


def extracted_from_schema(body: ExtractedDataSchema) -> ExtractedData:
    """Build domain ExtractedData from a request body"""
    identity = None
    if body.identity is not None:
        identity = PayslipIdentity(
            servidor=body.identity.servidor,
            matricula=body.identity.matricula,
            orgao=body.identity.orgao,
            competencia=body.identity.competencia,
        )

    return ExtractedData(
        base_ir=None if body.base_ir is None else _decimal(body.base_ir),
        items=tuple(
            LineItem(
                description=item.description,
                value=_decimal(item.value),
                bank=item.bank,
                contract=item.contract,
                installment_index=item.installment_index,
                start_date=item.start_date,
                end_date=item.end_date,
            )
            for item in body.items
        ),
        identity=identity,
    )


def line_items_to_schema(items: Iterable[LineItem]) -> List[LineItemSchema]:
    return [
        LineItemSchema(
            description=item.description,
            value=float(item.value),
            bank=item.bank,
            contract=item.contract,
            installment_index=item.installment_index,
            start_date=item.start_date,
            end_date=item.end_date,
        )
        for item in items
    ]


def _display(limit: Decimal, used: Decimal, available: Decimal) -> MoneyDisplay:
    return MoneyDisplay(limit=format_brl(limit), used=format_brl(used), available=format_brl(available))


def category_to_schema(calc: CategoryCalculation) -> CategoryCalculationSchema:
    return CategoryCalculationSchema(
        used=float(calc.used),
        items=line_items_to_schema(calc.items),
        limit=float(calc.limit),
        available=float(calc.available),
        is_negative=calc.is_negative,
        usage_percent=float(usage_percent(calc)),
        display=_display(calc.limit, calc.used, calc.available),
    )


def calculation_to_schema(result: CalculationResult) -> CalculationResultSchema:
    return CalculationResultSchema(
        base_ir=float(result.base_ir),
        loan=category_to_schema(result.loan),
        credit_card=category_to_schema(result.credit_card),
        benefit_card=category_to_schema(result.benefit_card),
        raw_items=line_items_to_schema(result.raw_items),
    )


def dashboard_response(session_id: str, data: ExtractedData, result: CalculationResult) -> DashboardResponse:
    """Identity banner plus the three margin cards"""
    identity = data.identity or PayslipIdentity()

    return DashboardResponse(
        session_id=session_id,
        identity=IdentityBanner(
            servidor=identity.servidor or DEFAULT_SERVIDOR,
            matricula=identity.matricula,
            orgao=identity.orgao,
            competencia=identity.competencia or DEFAULT_COMPETENCIA,
        ),
        base_ir_display=format_brl(result.base_ir),
        calculations=calculation_to_schema(result),
    )


def ledger_response(session_id: str, result: CalculationResult) -> LedgerResponse:
    """Credit history table with negative-margin alerts and category summary"""
    entries = [
        LedgerEntrySchema(
            description=entry.item.description,
            rubric_code=entry.rubric_code,
            category=entry.category,
            category_label=entry.category_label,
            bank=entry.bank,
            contract=entry.contract,
            installment_index=entry.installment_index,
            start_date=entry.item.start_date,
            end_date=entry.item.end_date,
            value=float(entry.item.value),
            value_display=format_brl(entry.item.value),
        )
        for entry in build_ledger(result)
    ]

    alerts = [
        NegativeAlertSchema(
            category=alert.category,
            name=alert.name,
            available=float(alert.available),
            limit=float(alert.limit),
            used=float(alert.used),
            display=_display(alert.limit, alert.used, alert.available),
        )
        for alert in negative_alerts(result)
    ]

    summary = [
        CategorySummarySchema(
            category=key,
            label=SUMMARY_LABELS[key],
            available=float(calc.available),
            limit=float(calc.limit),
            used=float(calc.used),
            is_negative=calc.is_negative,
            display=_display(calc.limit, calc.used, calc.available),
        )
        for key, calc in categories(result)
    ]

    return LedgerResponse(
        session_id=session_id,
        base_ir=float(result.base_ir),
        base_ir_display=format_brl(result.base_ir),
        active_contracts=len(result.raw_items),
        alerts=alerts,
        summary=summary,
        entries=entries,
    )
