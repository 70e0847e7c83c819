"""POST /v1/margin/calculate - Margin calculation over already-extracted data"""

from fastapi import APIRouter

from consigpro_gateway.api.v1.schemas import CalculationResultSchema, ExtractedDataSchema
from consigpro_gateway.api.v1.serializers import calculation_to_schema, extracted_from_schema
from consigpro_gateway.domain.margin import calculate_from_extracted

router = APIRouter()


@router.post("/margin/calculate", response_model=CalculationResultSchema)
def calculate(body: ExtractedDataSchema):
    """Stateless: nothing is stored for the caller"""
    result = calculate_from_extracted(extracted_from_schema(body))
    return calculation_to_schema(result)
