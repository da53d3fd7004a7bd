import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from config import MAX_UPLOAD_BYTES, ServiceSettings
from domain.errors import ConfigurationError
from interface import app as app_module
from interface.app import INGEST_PATH, UNEXPECTED_ERROR_MESSAGE, create_app

from conftest import FakeAIClient, FakeStore

CSV_TEXT = "S.No,Item Name,MRP,Rate,Qty\n1,MCB 32A,200,150,50\n"


def test_preflight_returns_empty_ok(make_client, ai_client):
    response = make_client(ai_client).options(INGEST_PATH)

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"


def test_missing_token_is_401(make_client, ai_client):
    response = make_client(ai_client).post(INGEST_PATH, json={"fileContent": CSV_TEXT})

    assert response.status_code == 401
    assert "error" in response.json()
    assert response.headers["access-control-allow-origin"] == "*"


def test_unknown_token_is_401(make_client, ai_client):
    response = make_client(ai_client).post(
        INGEST_PATH, json={"fileContent": CSV_TEXT}, headers={"Authorization": "Bearer nope"}
    )

    assert response.status_code == 401


def test_viewer_is_403(make_client, ai_client):
    response = make_client(ai_client).post(
        INGEST_PATH, json={"fileContent": CSV_TEXT}, headers={"Authorization": "Bearer viewer-token"}
    )

    assert response.status_code == 403


def test_inline_csv_uses_fast_path(make_client, ai_client, staff_headers):
    response = make_client(ai_client).post(
        INGEST_PATH, json={"fileContent": CSV_TEXT, "fileType": "csv"}, headers=staff_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["products"] == [{"name": "MCB 32A", "mrp_price": 200, "purchase_price": 150, "stock_qty": 50}]
    assert body["strategy"] == "tabular"
    assert body["skipped_rows"] == 0
    assert ai_client.calls == []


def test_multipart_csv_upload(make_client, ai_client, staff_headers):
    response = make_client(ai_client).post(
        INGEST_PATH,
        files={"file": ("prices.csv", CSV_TEXT.encode(), "text/csv")},
        headers=staff_headers,
    )

    assert response.status_code == 200
    assert response.json()["products"][0]["name"] == "MCB 32A"


def test_pdf_upload_uses_ai(make_client, ai_client, staff_headers):
    response = make_client(ai_client).post(
        INGEST_PATH,
        files={"file": ("list.pdf", b"%PDF-1.4", "application/pdf")},
        headers=staff_headers,
    )

    assert response.status_code == 200
    assert response.json()["products"] == [{"name": "MCB 32A", "selling_price": 150}]
    assert response.json()["strategy"] == "ai"


def test_oversized_upload_is_rejected_before_parsing(make_client, ai_client, staff_headers, monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("pipeline must not run")

    monkeypatch.setattr(app_module, "parse_wholesale_file", _fail)
    payload = b"a,b,c\n" * (MAX_UPLOAD_BYTES // 6 + 10)

    response = make_client(ai_client).post(
        INGEST_PATH, files={"file": ("big.csv", payload, "text/csv")}, headers=staff_headers
    )

    assert response.status_code == 413
    assert ai_client.calls == []


def test_oversized_inline_text_is_413(make_client, ai_client, staff_headers):
    response = make_client(ai_client).post(
        INGEST_PATH, json={"fileContent": "x" * (MAX_UPLOAD_BYTES + 1)}, headers=staff_headers
    )

    assert response.status_code == 413


def test_unsupported_upload_is_400(make_client, ai_client, staff_headers):
    response = make_client(ai_client).post(
        INGEST_PATH, files={"file": ("notes.txt", b"hello", "text/plain")}, headers=staff_headers
    )

    assert response.status_code == 400


def test_missing_file_content_is_400(make_client, ai_client, staff_headers):
    response = make_client(ai_client).post(INGEST_PATH, json={"fileType": "csv"}, headers=staff_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "fileContent is required"}


@pytest.mark.parametrize(
    "status_code, expected",
    [(429, 429), (402, 402), (500, 500)],
)
def test_upstream_errors_map_to_statuses(make_client, staff_headers, status_code, expected):
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    error = openai.APIStatusError(
        "gateway error", response=httpx.Response(status_code, request=request), body=None
    )

    response = make_client(FakeAIClient(error=error)).post(
        INGEST_PATH,
        files={"file": ("list.pdf", b"%PDF-1.4", "application/pdf")},
        headers=staff_headers,
    )

    assert response.status_code == expected
    assert set(response.json()) == {"error"}


def test_unparseable_ai_output_is_500(make_client, staff_headers):
    response = make_client(FakeAIClient(content="Sorry, nothing here.")).post(
        INGEST_PATH,
        files={"file": ("list.pdf", b"%PDF-1.4", "application/pdf")},
        headers=staff_headers,
    )

    assert response.status_code == 500
    assert "ensure the file contains product information" in response.json()["error"]


def test_entirely_invalid_ai_output_is_500(make_client, staff_headers):
    content = "[" + ",".join('{"name": "Fan", "selling_price": -1}' for _ in range(10)) + "]"

    response = make_client(FakeAIClient(content=content)).post(
        INGEST_PATH,
        files={"file": ("list.pdf", b"%PDF-1.4", "application/pdf")},
        headers=staff_headers,
    )

    assert response.status_code == 500
    assert "products" not in response.json()


def test_missing_configuration_stops_startup(monkeypatch):
    for name in ("AI_GATEWAY_API_KEY", "SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"):
        monkeypatch.delenv(name, raising=False)
    settings = ServiceSettings(_env_file=None)

    assert settings.missing() == ["AI_GATEWAY_API_KEY", "SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"]
    with pytest.raises(ConfigurationError):
        create_app(settings=settings, store=FakeStore(), ai_client=FakeAIClient())


def test_health(make_client, ai_client):
    assert make_client(ai_client).get("/health").json() == {"status": "healthy"}


def test_wrong_method_keeps_error_envelope_and_cors(make_client, ai_client):
    response = make_client(ai_client).get(INGEST_PATH)

    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["allow"]


def test_unknown_path_keeps_error_envelope_and_cors(make_client, ai_client):
    response = make_client(ai_client).post("/no-such-endpoint")

    assert response.status_code == 404
    assert set(response.json()) == {"error"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_unexpected_failure_is_generic_500(settings, store, ai_client, staff_headers, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(app_module, "parse_wholesale_file", _boom)
    client = TestClient(
        create_app(settings=settings, store=store, ai_client=ai_client),
        raise_server_exceptions=False,
    )

    response = client.post(INGEST_PATH, json={"fileContent": CSV_TEXT}, headers=staff_headers)

    assert response.status_code == 500
    assert response.json() == {"error": UNEXPECTED_ERROR_MESSAGE}
    assert response.headers["access-control-allow-origin"] == "*"
