"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class LineItem:
    """One recurring payroll deduction (consignação) from the statement"""

    description: str  # Rubrica, the only classification signal
    value: Decimal  # Per-period installment, never negative
    bank: Optional[str] = None
    contract: Optional[str] = None
    installment_index: Optional[str] = None  # e.g. "44/96"
    start_date: Optional[str] = None  # Free-text "MM/AAAA" label
    end_date: Optional[str] = None


@dataclass(frozen=True)
class PayslipIdentity:
    """Who the payslip belongs to"""

    servidor: Optional[str] = None
    matricula: Optional[str] = None
    orgao: Optional[str] = None
    competencia: Optional[str] = None


@dataclass(frozen=True)
class ExtractedData:
    """Structured result of one document analysis"""

    base_ir: Optional[Decimal]
    items: Tuple[LineItem, ...] = ()
    identity: Optional[PayslipIdentity] = None


@dataclass(frozen=True)
class CategoryCalculation:
    """Margin usage for one deduction category"""

    used: Decimal
    items: Tuple[LineItem, ...]
    limit: Decimal
    available: Decimal
    is_negative: bool


@dataclass(frozen=True)
class CalculationResult:
    """All three margin categories derived from one ExtractedData"""

    base_ir: Decimal
    loan: CategoryCalculation
    credit_card: CategoryCalculation
    benefit_card: CategoryCalculation
    raw_items: Tuple[LineItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DocumentUpload:
    """Raw uploaded document handed to the extraction service"""

    filename: str
    mime_type: str
    content: bytes
