"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from consigpro_gateway.api.main import create_app
from consigpro_gateway.api.dependencies import get_analysis_store
from consigpro_gateway.infrastructure.state.analysis_store import AnalysisStore
from consigpro_gateway.domain.models import ExtractedData, LineItem, PayslipIdentity


@pytest.fixture
def store() -> AnalysisStore:
    """Fresh in-memory analysis store per test"""
    return AnalysisStore(ttl_seconds=3600)


@pytest.fixture
def client(store: AnalysisStore) -> TestClient:
    """Create FastAPI test client with an isolated analysis store"""
    app = create_app()
    app.dependency_overrides[get_analysis_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def sample_items() -> list[LineItem]:
    """Consignment lines as extracted from a typical SIAPE statement"""
    return [
        LineItem(
            description="34228 - EMPREST BCO PRIVADOS - PAN",
            value=Decimal("200.00"),
            bank="PAN",
            contract="312456",
            installment_index="44/96",
            start_date="01/2022",
            end_date="12/2029",
        ),
        LineItem(
            description="AMORT CARTAO CREDITO XYZ",
            value=Decimal("60.00"),
            bank="BMG",
        ),
    ]


@pytest.fixture
def sample_data(sample_items: list[LineItem]) -> ExtractedData:
    """ExtractedData with a credit card over its 5% margin"""
    return ExtractedData(
        base_ir=Decimal("1000.00"),
        items=tuple(sample_items),
        identity=PayslipIdentity(
            servidor="MARIA DA SILVA",
            matricula="1160815/2774526",
            orgao="MINISTERIO DA SAUDE",
            competencia="08/2025",
        ),
    )
