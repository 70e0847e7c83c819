"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ApiModel(BaseModel):
    """Wire models use the camelCase names of the extraction schema"""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class LineItemSchema(ApiModel):
    """One consignment line as extracted from the statement"""

    description: str = Field(..., description="Rubrica, e.g. '34228 - EMPREST BCO PRIVADOS - PAN'")
    value: float = Field(..., ge=0, description="Installment amount in BRL")
    bank: Optional[str] = None
    contract: Optional[str] = None
    installment_index: Optional[str] = Field(None, alias="installmentIndex")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")


class PayslipIdentitySchema(ApiModel):
    """Payslip header data"""

    servidor: Optional[str] = None
    matricula: Optional[str] = None
    orgao: Optional[str] = None
    competencia: Optional[str] = None


class ExtractedDataSchema(ApiModel):
    """Request body for POST /v1/margin/calculate"""

    base_ir: Optional[float] = Field(None, alias="baseIR", ge=0)
    items: List[LineItemSchema] = Field(default_factory=list)
    identity: Optional[PayslipIdentitySchema] = Field(None, alias="contrachequeData")


class MoneyDisplay(ApiModel):
    """pt-BR formatted amounts for a category"""

    limit: str
    used: str
    available: str


class CategoryCalculationSchema(ApiModel):
    """Margin usage for one category"""

    used: float
    items: List[LineItemSchema]
    limit: float
    available: float
    is_negative: bool = Field(..., alias="isNegative")
    usage_percent: float = Field(..., alias="usagePercent")
    display: MoneyDisplay


class CalculationResultSchema(ApiModel):
    """Response for POST /v1/margin/calculate"""

    base_ir: float = Field(..., alias="baseIR")
    loan: CategoryCalculationSchema
    credit_card: CategoryCalculationSchema = Field(..., alias="creditCard")
    benefit_card: CategoryCalculationSchema = Field(..., alias="benefitCard")
    raw_items: List[LineItemSchema] = Field(..., alias="rawItems")


class IdentityBanner(ApiModel):
    """Payslip header with display defaults applied"""

    servidor: str
    matricula: Optional[str] = None
    orgao: Optional[str] = None
    competencia: str


class DashboardResponse(ApiModel):
    """Response for POST /v1/analysis and GET /v1/analysis/{session_id}"""

    session_id: str = Field(..., alias="sessionId")
    identity: IdentityBanner
    base_ir_display: str = Field(..., alias="baseIRDisplay")
    calculations: CalculationResultSchema


class LedgerEntrySchema(ApiModel):
    """Single row of the consolidated credit history"""

    description: str
    rubric_code: str = Field(..., alias="rubricCode")
    category: str  # loan | credit_card | benefit_card | other
    category_label: str = Field(..., alias="categoryLabel")
    bank: str
    contract: str
    installment_index: str = Field(..., alias="installmentIndex")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    value: float
    value_display: str = Field(..., alias="valueDisplay")


class NegativeAlertSchema(ApiModel):
    """Category over its legal limit"""

    category: str
    name: str
    available: float
    limit: float
    used: float
    display: MoneyDisplay


class CategorySummarySchema(ApiModel):
    """Consolidated margin summary shown above the ledger"""

    category: str
    label: str
    available: float
    limit: float
    used: float
    is_negative: bool = Field(..., alias="isNegative")
    display: MoneyDisplay


class LedgerResponse(ApiModel):
    """Response for GET /v1/analysis/{session_id}/ledger"""

    session_id: str = Field(..., alias="sessionId")
    base_ir: float = Field(..., alias="baseIR")
    base_ir_display: str = Field(..., alias="baseIRDisplay")
    active_contracts: int = Field(..., alias="activeContracts")
    alerts: List[NegativeAlertSchema]
    summary: List[CategorySummarySchema]
    entries: List[LedgerEntrySchema]
