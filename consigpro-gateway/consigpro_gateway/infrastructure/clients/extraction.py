"""Gemini HTTP client that turns payroll documents into ExtractedData"""

import base64
import json
import logging
import httpx
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from consigpro_gateway.domain.models import DocumentUpload, ExtractedData, LineItem, PayslipIdentity
from consigpro_gateway.domain.exceptions import ExtractionError, MissingDocumentError
from consigpro_gateway.infrastructure.clients.extraction_schema import EXTRACTION_PROMPT, RESPONSE_SCHEMA
from consigpro_gateway.infrastructure.observability.metrics import (
    extraction_latency_histogram,
    extraction_failures_counter,
)
from consigpro_gateway.config import settings

logger = logging.getLogger(__name__)


class GeminiExtractionClient:
    """Client for the external document-understanding model"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.base_url = (base_url or settings.gemini_api_base).rstrip("/")
        self.model = model or settings.gemini_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    async def extract(
        self,
        primary: Optional[DocumentUpload],
        secondary: Optional[DocumentUpload] = None,
    ) -> ExtractedData:
        """
        Send the payslip (and optional consignment statement) to the model.

        Raises:
            MissingDocumentError: No payslip supplied; nothing is sent
            ExtractionError: On timeout, HTTP errors, empty or malformed response
        """
        if primary is None or not primary.content:
            raise MissingDocumentError()

        documents = [primary] if secondary is None or not secondary.content else [primary, secondary]
        body = build_request_body(documents)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with extraction_latency_histogram.time():
                    response = await client.post(
                        self.endpoint,
                        headers={"x-goog-api-key": self.api_key},
                        json=body,
                    )
                response.raise_for_status()

                text = response_text(response.json())
                if not text:
                    raise ValueError("model returned no text")

                data = parse_extracted_data(json.loads(text))
                logger.info(
                    "Extraction succeeded",
                    extra={"documents": len(documents), "item_count": len(data.items)},
                )
                return data

            except httpx.TimeoutException as e:
                extraction_failures_counter.inc()
                logger.error(f"Extraction timeout after {self.timeout}s")
                raise ExtractionError() from e
            except httpx.HTTPError as e:
                extraction_failures_counter.inc()
                logger.error(f"Extraction service error: {e}")
                raise ExtractionError() from e
            except (KeyError, IndexError, AttributeError, ValueError, TypeError, InvalidOperation) as e:
                extraction_failures_counter.inc()
                logger.error(f"Invalid extraction payload: {e}")
                raise ExtractionError() from e


def build_request_body(documents: List[DocumentUpload]) -> Dict[str, Any]:
    """generateContent body: inline documents first, then the instruction"""
    parts: List[Dict[str, Any]] = [
        {
            "inlineData": {
                "mimeType": doc.mime_type,
                "data": base64.b64encode(doc.content).decode("ascii"),
            }
        }
        for doc in documents
    ]
    parts.append({"text": EXTRACTION_PROMPT})

    return {
        "contents": [{"parts": parts}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def response_text(payload: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate"""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts)


def parse_extracted_data(payload: Any) -> ExtractedData:
    """
    Validate the model's JSON and build domain objects.

    Raises ValueError/TypeError/KeyError when the payload doesn't match the
    response schema. A null or missing baseIR is kept as None.
    """
    if not isinstance(payload, dict):
        raise TypeError(f"expected JSON object, got {type(payload).__name__}")

    raw_items = payload.get("items")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise TypeError("items must be a list")

    base_ir = payload.get("baseIR")
    identity = payload.get("contrachequeData")

    return ExtractedData(
        base_ir=None if base_ir is None else _base_ir(base_ir),
        items=tuple(_line_item(raw) for raw in raw_items),
        identity=_identity(identity) if identity else None,
    )


def _amount(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"amount must be a number, got {value!r}")
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount


def _base_ir(value: Any) -> Decimal:
    amount = _amount(value)
    if amount < 0:
        raise ValueError(f"baseIR must not be negative: {amount}")
    return amount


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _line_item(raw: Dict[str, Any]) -> LineItem:
    value = _amount(raw["value"])
    if value < 0:
        raise ValueError(f"installment value must not be negative: {value}")

    description = raw["description"]
    if not isinstance(description, str):
        raise TypeError("description must be a string")

    return LineItem(
        description=description,
        value=value,
        bank=_text(raw.get("bank")),
        contract=_text(raw.get("contract")),
        installment_index=_text(raw.get("installmentIndex")),
        start_date=_text(raw.get("startDate")),
        end_date=_text(raw.get("endDate")),
    )


def _identity(raw: Dict[str, Any]) -> PayslipIdentity:
    if not isinstance(raw, dict):
        raise TypeError("contrachequeData must be an object")
    return PayslipIdentity(
        servidor=_text(raw.get("servidor")),
        matricula=_text(raw.get("matricula")),
        orgao=_text(raw.get("orgao")),
        competencia=_text(raw.get("competencia")),
    )
