"""
Wholesale file ingestion pipeline.

Sequences the two extraction strategies for one upload:

- CSV / XLSX: direct tabular extraction first (fast path). A non-empty result
  is returned immediately; an empty one falls through to the AI path with the
  content rendered as text.
- PDF: straight to the AI path, the document sent inline.

The AI path output is validated record by record before it is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

import openai

from config import ServiceSettings
from domain.canonical import CandidateProduct
from input_readers import (
    FILE_TYPE_CSV,
    FILE_TYPE_PDF,
    FILE_TYPE_XLSX,
    MIME_BY_FILE_TYPE,
    decode_text,
    read_excel_rows,
    rows_to_csv_text,
    to_data_url,
)

from .ai_fallback import (
    build_document_messages,
    build_text_messages,
    parse_ai_response,
    request_ai_extraction,
)
from .tabular import TabularResult, extract_from_csv_text, extract_products
from .validation import validate_products

logger = logging.getLogger(__name__)

STRATEGY_TABULAR = "tabular"
STRATEGY_AI = "ai"


@dataclass
class Upload:
    """One file to ingest: raw bytes (multipart) or text (inline JSON body)."""

    content: Union[bytes, str]
    file_type: str
    filename: str | None = None


@dataclass
class IngestionResult:
    products: List[CandidateProduct] = field(default_factory=list)
    skipped_rows: int = 0
    strategy: str = STRATEGY_TABULAR

    def to_payload(self) -> Dict[str, Any]:
        return {
            "products": [p.to_record() for p in self.products],
            "skipped_rows": self.skipped_rows,
            "strategy": self.strategy,
        }


def _as_text(content: Union[bytes, str]) -> str:
    return content if isinstance(content, str) else decode_text(content)


def _from_tabular(result: TabularResult) -> IngestionResult:
    return IngestionResult(
        products=list(result.products),
        skipped_rows=result.skipped_rows,
        strategy=STRATEGY_TABULAR,
    )


def _run_ai(messages: List[Dict[str, Any]], settings: ServiceSettings, client: openai.OpenAI) -> IngestionResult:
    raw_output = request_ai_extraction(messages, settings, client)
    validated = validate_products(parse_ai_response(raw_output))
    return IngestionResult(
        products=validated.products,
        skipped_rows=validated.rejected,
        strategy=STRATEGY_AI,
    )


def parse_wholesale_file(upload: Upload, settings: ServiceSettings, client: openai.OpenAI) -> IngestionResult:
    """
    Extract candidate products from one upload.

    Args:
        upload: File content and its classified type
        settings: Validated service settings (model, timeouts)
        client: OpenAI-compatible client for the AI fallback

    Returns:
        IngestionResult with the products, the count of dropped rows/records
        and which strategy produced them

    Raises:
        IngestionError subclasses for upstream, parse and validation failures
    """
    if upload.file_type == FILE_TYPE_PDF:
        data = upload.content if isinstance(upload.content, bytes) else upload.content.encode("utf-8")
        logger.info("PDF upload (%d bytes): using AI extraction", len(data))
        messages = build_document_messages(to_data_url(data, MIME_BY_FILE_TYPE[FILE_TYPE_PDF]))
        return _run_ai(messages, settings, client)

    if upload.file_type == FILE_TYPE_XLSX:
        data = upload.content if isinstance(upload.content, bytes) else upload.content.encode("utf-8")
        rows = read_excel_rows(data)
        try:
            tabular = extract_products(rows)
        except Exception:
            logger.warning("Direct spreadsheet extraction failed; falling back to AI", exc_info=True)
            tabular = TabularResult()
        if tabular.products:
            logger.info("Spreadsheet fast path extracted %d products", len(tabular.products))
            return _from_tabular(tabular)
        text = rows_to_csv_text(rows)
    else:
        text = _as_text(upload.content)
        tabular = extract_from_csv_text(text)
        if tabular.products:
            logger.info(
                "CSV fast path extracted %d products (%d rows skipped)",
                len(tabular.products),
                tabular.skipped_rows,
            )
            return _from_tabular(tabular)

    logger.info("Direct extraction found no products; using AI extraction")
    return _run_ai(build_text_messages(text, FILE_TYPE_CSV), settings, client)
