"""
E2E tests for payroll personas against the mock extraction server.

These tests require the mock server to be running and the gateway pointed at it:
    uvicorn mock.extraction_server.main:app --port 8001
    GEMINI_API_BASE=http://localhost:8001 pytest -m integration

Personas (the payslip file content selects the canned model answer):
- servidor_regular: loan and card within limits
- servidor_negativo: credit card amortization over the 5% margin
- servidor_sem_consignacoes: no deductions at all
- ilegivel: model returns no text
"""

import pytest
from fastapi.testclient import TestClient
from consigpro_gateway.domain.exceptions import EXTRACTION_FAILED_MESSAGE


def upload(client: TestClient, persona: str, session_id: str):
    return client.post(
        "/v1/analysis",
        files={"contracheque": ("contracheque.pdf", persona.encode(), "application/pdf")},
        headers={"X-Session-ID": session_id},
    )


@pytest.mark.integration
def test_servidor_regular(client: TestClient):
    """
    servidor_regular: 200 loan + 30 credit card over a 1000 base
    Expected: all margins available
    """
    response = upload(client, "servidor_regular", "e2e-regular")

    assert response.status_code == 200
    calc = response.json()["calculations"]
    assert calc["loan"]["available"] == 150.0
    assert calc["creditCard"]["available"] == 20.0
    assert calc["benefitCard"]["available"] == 50.0
    assert not any(calc[k]["isNegative"] for k in ("loan", "creditCard", "benefitCard"))


@pytest.mark.integration
def test_servidor_negativo(client: TestClient):
    """
    servidor_negativo: credit card amortization of 60 over a 50 limit
    Expected: negative credit card margin flagged in the ledger
    """
    response = upload(client, "servidor_negativo", "e2e-negativo")
    assert response.status_code == 200

    ledger = client.get("/v1/analysis/e2e-negativo/ledger").json()
    assert [a["category"] for a in ledger["alerts"]] == ["credit_card"]
    assert ledger["alerts"][0]["available"] == -10.0
    assert ledger["entries"][0]["bank"] == "BANRISUL"


@pytest.mark.integration
def test_servidor_sem_consignacoes(client: TestClient):
    """
    servidor_sem_consignacoes: no deductions
    Expected: full margins, empty ledger, default identity banner
    """
    response = upload(client, "servidor_sem_consignacoes", "e2e-vazio")

    assert response.status_code == 200
    data = response.json()
    assert data["identity"]["servidor"] == "Servidor Identificado"
    assert data["calculations"]["loan"]["available"] == 875.0

    ledger = client.get("/v1/analysis/e2e-vazio/ledger").json()
    assert ledger["activeContracts"] == 0
    assert ledger["entries"] == []


@pytest.mark.integration
def test_ilegivel(client: TestClient):
    """
    ilegivel: model answers with empty text
    Expected: single user-facing extraction error
    """
    response = upload(client, "ilegivel", "e2e-ilegivel")

    assert response.status_code == 502
    assert response.json()["detail"] == EXTRACTION_FAILED_MESSAGE
