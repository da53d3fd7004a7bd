"""
Wholesale import API.

FastAPI surface of the ingestion pipeline. One endpoint accepts either a
multipart upload (`file` part: .csv, .xlsx or .pdf) or a JSON body
`{fileContent, fileType?}` with inline CSV text, and answers with
`{products: [...]}` or `{error: message}`.

Run with: uvicorn --factory interface.app:create_app
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import openai
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import (
    IMPORT_ROLES,
    MAX_UPLOAD_BYTES,
    MULTIPART_OVERHEAD_BYTES,
    ServiceSettings,
)
from domain.errors import BadRequest, IngestionError, PayloadTooLarge, UnsupportedFileType
from extraction import Upload, parse_wholesale_file
from extraction.llm_client import get_client
from input_readers import FILE_TYPE_CSV, classify_file

from .auth import DataStore, SupabaseStore, authenticate, authorize, bearer_token

logger = logging.getLogger(__name__)

INGEST_PATH = "/parse-wholesale-file"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

TOO_LARGE_MESSAGE = f"File too large. Maximum size is {MAX_UPLOAD_BYTES // 1024} KB."
UNEXPECTED_ERROR_MESSAGE = "Unexpected error while processing the file"


def _json(content: Dict[str, Any], status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _error(message: str, status_code: int, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    response = _json({"error": message}, status_code)
    if headers:
        response.headers.update(headers)
    return response


def _check_size(size: int) -> None:
    if size > MAX_UPLOAD_BYTES:
        raise PayloadTooLarge(TOO_LARGE_MESSAGE)


def _declared_length(request: Request) -> Optional[int]:
    try:
        return int(request.headers.get("content-length", ""))
    except ValueError:
        return None


async def _read_multipart(request: Request) -> Upload:
    declared = _declared_length(request)
    if declared is not None and declared > MAX_UPLOAD_BYTES + MULTIPART_OVERHEAD_BYTES:
        raise PayloadTooLarge(TOO_LARGE_MESSAGE)

    form = await request.form()
    file = form.get("file")
    if not isinstance(file, UploadFile):
        raise BadRequest("No file uploaded")

    data = await file.read()
    _check_size(len(data))
    file_type = classify_file(file.filename, file.content_type)
    return Upload(content=data, file_type=file_type, filename=file.filename)


async def _read_json(request: Request) -> Upload:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequest("Request body must be valid JSON") from e

    if not isinstance(body, dict) or not isinstance(body.get("fileContent"), str):
        raise BadRequest("fileContent is required")

    content = body["fileContent"]
    _check_size(len(content.encode("utf-8")))

    file_type = str(body.get("fileType") or FILE_TYPE_CSV).strip().lower()
    if file_type != FILE_TYPE_CSV:
        raise UnsupportedFileType("Inline content must be CSV text; upload other files as multipart")
    if not content.strip():
        raise BadRequest("fileContent is empty")
    return Upload(content=content, file_type=file_type)


async def read_upload(request: Request) -> Upload:
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" in content_type:
        return await _read_multipart(request)
    return await _read_json(request)


def create_app(
    settings: Optional[ServiceSettings] = None,
    store: Optional[DataStore] = None,
    ai_client: Optional[openai.OpenAI] = None,
) -> FastAPI:
    """
    Build the API.

    Settings are validated here, once, so a missing key or store credential
    stops the service at startup instead of failing every request.
    """
    settings = (settings or ServiceSettings()).ensure_complete()
    logging.basicConfig(level=settings.log_level.upper())

    store = store or SupabaseStore.from_settings(settings)
    ai_client = ai_client or get_client(settings)

    app = FastAPI(
        title="Wholesale Import API",
        description="Extracts candidate products from wholesaler price lists (CSV, XLSX, PDF)",
        version="1.0.0",
    )
    app.state.settings = settings

    @app.exception_handler(IngestionError)
    async def ingestion_error_handler(request: Request, exc: IngestionError) -> JSONResponse:
        """Render domain errors as {error} with their own status."""
        if exc.status_code >= 500:
            logger.error("Import failed: %s", exc.message)
        return _error(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Routing errors (404, 405) keep the same envelope and CORS headers."""
        return _error(str(exc.detail), exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return _error(UNEXPECTED_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.options(INGEST_PATH)
    async def preflight() -> Response:
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

    @app.post(INGEST_PATH)
    async def parse_wholesale(request: Request) -> JSONResponse:
        """Authenticate, authorize, read the upload and run the pipeline."""
        token = bearer_token(request.headers.get("authorization"))
        user_id = await run_in_threadpool(authenticate, store, token)
        role = await run_in_threadpool(authorize, store, user_id, IMPORT_ROLES)

        upload = await read_upload(request)
        logger.info("User %s (%s) importing %s file", user_id, role, upload.file_type)

        result = await run_in_threadpool(parse_wholesale_file, upload, settings, ai_client)
        logger.info(
            "Returning %d products via %s (%d skipped)",
            len(result.products),
            result.strategy,
            result.skipped_rows,
        )
        return _json(result.to_payload())

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
