"""GET /v1/analysis/{session_id}/ledger - Consolidated credit history"""

from fastapi import APIRouter, Depends, HTTPException

from consigpro_gateway.api.v1.schemas import LedgerResponse
from consigpro_gateway.api.v1.serializers import ledger_response
from consigpro_gateway.api.dependencies import get_analysis_store
from consigpro_gateway.domain.exceptions import AnalysisNotFoundError
from consigpro_gateway.infrastructure.state.analysis_store import AnalysisStore

router = APIRouter()


@router.get("/analysis/{session_id}/ledger", response_model=LedgerResponse)
def get_ledger(session_id: str, store: AnalysisStore = Depends(get_analysis_store)):
    """
    Retrieve every contract of the current analysis.

    Returns:
        Contracts sorted by installment value (largest first), negative-margin
        alerts and the per-category summary
    """
    try:
        snapshot = store.get(session_id)
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Nenhuma análise encontrada para esta sessão.")

    return ledger_response(session_id, snapshot.calculations)
