"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from consigpro_gateway.config import settings
from consigpro_gateway.infrastructure.clients.extraction import GeminiExtractionClient
from consigpro_gateway.infrastructure.state.analysis_store import AnalysisStore

# One store per process; analyses live only as long as the service
_analysis_store = AnalysisStore(ttl_seconds=settings.session_ttl_minutes * 60)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_extraction_client() -> GeminiExtractionClient:
    """Provide document extraction client instance"""
    return GeminiExtractionClient()


def get_analysis_store() -> AnalysisStore:
    """Provide the process-wide analysis store"""
    return _analysis_store
