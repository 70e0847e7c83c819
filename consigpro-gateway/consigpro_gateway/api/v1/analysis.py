"""POST/GET/DELETE /v1/analysis - document analysis and dashboard endpoints"""

import logging
import mimetypes
import time
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, File, Header, HTTPException, Request, Response, UploadFile

from consigpro_gateway.api.v1.schemas import DashboardResponse
from consigpro_gateway.api.v1.serializers import dashboard_response
from consigpro_gateway.api.dependencies import get_analysis_store, get_extraction_client, get_request_id
from consigpro_gateway.config import settings
from consigpro_gateway.domain.models import DocumentUpload
from consigpro_gateway.domain.ledger import negative_alerts
from consigpro_gateway.domain.exceptions import (
    AnalysisNotFoundError,
    AnalysisSupersededError,
    ExtractionError,
    MissingDocumentError,
    MISSING_PAYSLIP_MESSAGE,
)
from consigpro_gateway.infrastructure.clients.extraction import GeminiExtractionClient
from consigpro_gateway.infrastructure.state.analysis_store import AnalysisStore
from consigpro_gateway.infrastructure.observability.metrics import record_analysis
from consigpro_gateway.infrastructure.observability.logging import log_analysis

router = APIRouter()


async def read_upload(upload: Optional[UploadFile]) -> Optional[DocumentUpload]:
    """
    Read an uploaded PDF or image into memory.

    Returns None for absent or empty uploads.
    Raises HTTPException 413/415 for oversized or unsupported files.
    """
    if upload is None:
        return None

    max_bytes = settings.max_upload_mb * 1024 * 1024
    content = await upload.read(max_bytes + 1)
    if not content:
        return None

    if len(content) > max_bytes:
        raise HTTPException(status_code=413, detail=f"Arquivo deve ter no máximo {settings.max_upload_mb}MB.")

    filename = upload.filename or "documento.pdf"
    mime_type = upload.content_type
    if not mime_type or mime_type == "application/octet-stream":
        mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

    if mime_type != "application/pdf" and not mime_type.startswith("image/"):
        raise HTTPException(status_code=415, detail="Envie um PDF ou imagem.")

    return DocumentUpload(filename=filename, mime_type=mime_type, content=content)


@router.post("/analysis", response_model=DashboardResponse)
async def create_analysis(
    request: Request,
    response: Response,
    contracheque: Optional[UploadFile] = File(None, description="Contracheque (obrigatório)"),
    extrato: Optional[UploadFile] = File(None, description="Extrato de consignações"),
    x_session_id: Optional[str] = Header(None),
    extraction_client: GeminiExtractionClient = Depends(get_extraction_client),
    store: AnalysisStore = Depends(get_analysis_store),
):
    """
    Analyse payroll documents and derive credit margins.

    Flow:
    1. Validate uploads (payslip required, nothing is sent otherwise)
    2. Start a new request generation for the session
    3. Extract structured data through the AI service
    4. Commit the result unless a newer request superseded it
    5. Return the dashboard view
    """
    start_time = time.time()
    request_id = get_request_id(request)
    session_id = x_session_id or str(uuid.uuid4())
    session_headers = {"X-Session-ID": session_id}

    store.cleanup_expired()

    primary = await read_upload(contracheque)
    if primary is None:
        record_analysis("rejected")
        raise HTTPException(status_code=400, detail=MISSING_PAYSLIP_MESSAGE, headers=session_headers)

    secondary = await read_upload(extrato)

    generation = store.begin(session_id)

    try:
        data = await extraction_client.extract(primary, secondary)
        snapshot = store.commit(session_id, generation, data)

    except MissingDocumentError as e:
        record_analysis("rejected")
        raise HTTPException(status_code=400, detail=str(e), headers=session_headers)

    except ExtractionError as e:
        record_analysis("failed")
        logging.error(f"Extraction failed: {e.__cause__!r}", extra={"request_id": request_id, "session_id": session_id})
        raise HTTPException(status_code=502, detail=str(e), headers=session_headers)

    except AnalysisSupersededError as e:
        record_analysis("superseded")
        logging.warning(f"Analysis superseded: {e}", extra={"request_id": request_id, "session_id": session_id})
        raise HTTPException(
            status_code=409,
            detail="Uma análise mais recente foi iniciada para esta sessão.",
            headers=session_headers,
        )

    except Exception as e:
        record_analysis("failed")
        logging.exception(f"Unexpected error: {e}", extra={"request_id": request_id, "session_id": session_id})
        raise HTTPException(status_code=500, detail="Erro na análise.", headers=session_headers)

    negatives = [alert.category for alert in negative_alerts(snapshot.calculations)]
    duration_ms = (time.time() - start_time) * 1000
    record_analysis("completed", negatives)
    log_analysis(request_id, session_id, len(snapshot.data.items), negatives, duration_ms)

    response.headers["X-Session-ID"] = session_id
    return dashboard_response(session_id, snapshot.data, snapshot.calculations)


@router.get("/analysis/{session_id}", response_model=DashboardResponse)
def get_analysis(session_id: str, store: AnalysisStore = Depends(get_analysis_store)):
    """Current dashboard for a session"""
    try:
        snapshot = store.get(session_id)
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Nenhuma análise encontrada para esta sessão.")

    return dashboard_response(session_id, snapshot.data, snapshot.calculations)


@router.delete("/analysis/{session_id}", status_code=204)
def clear_analysis(session_id: str, store: AnalysisStore = Depends(get_analysis_store)):
    """Forget the session's current analysis"""
    store.clear(session_id)
    return Response(status_code=204)
