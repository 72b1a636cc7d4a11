from fastapi.testclient import TestClient

from docextract.core.config import ExtractionLimits
from docextract.main import app
from docextract.routers.dependencies import get_extraction_service
from conftest import build_docx, build_pptx, slide_xml

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def test_read_main():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert "PPTX" in response.json()["formats"]


def test_formats():
    response = client.get("/formats")
    assert response.status_code == 200
    body = response.json()
    assert ".xlsx" in body["extensions"]
    assert body["maxFileSize"] == 10 * 1024 * 1024


def test_parse_txt():
    response = client.post(
        "/parse-document",
        files={"file": ("notes.txt", b"Hello from a text file", "text/plain")}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["content"] == "Hello from a text file"
    assert body["wordCount"] == 5
    assert body["characterCount"] == 22
    assert body["metadata"]["fileName"] == "notes.txt"
    assert body["structuredData"] is None


def test_parse_csv_under_version_prefix():
    response = client.post(
        "/api/v1/parse-document",
        files={"file": ("data.csv", b"id,name\n1,ann\n2,bob\n", "text/csv")}
    )
    assert response.status_code == 200
    metadata = response.json()["metadata"]
    assert metadata["headers"] == ["id", "name"]
    assert metadata["rowCount"] == 2


def test_parse_docx():
    data = build_docx([["Dear team,"], ["See attached."]])
    response = client.post("/parse-document", files={"file": ("memo.docx", data, DOCX_TYPE)})
    assert response.status_code == 200
    assert response.json()["content"] == "Dear team,\n\nSee attached."


def test_parse_pptx_returns_structured_data():
    data = build_pptx({1: slide_xml(title="Roadmap", body=["Ship it"])}, title="Plan")
    response = client.post("/parse-document", files={"file": ("plan.pptx", data, PPTX_TYPE)})
    assert response.status_code == 200
    body = response.json()
    assert body["structuredData"]["slides"][0]["title"] == "Roadmap"
    assert body["metadata"]["presentationTitle"] == "Plan"


def test_corrupt_document_still_succeeds():
    response = client.post(
        "/parse-document",
        files={"file": ("broken.docx", b"not really a docx", DOCX_TYPE)}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["error"]
    assert body["metadata"]["extractionStatus"] == "degraded"


def test_client_path_is_stripped_from_filename():
    response = client.post(
        "/parse-document",
        files={"file": ("C:\\Users\\me\\notes.txt", b"text", "text/plain")}
    )
    assert response.json()["metadata"]["fileName"] == "notes.txt"


def test_missing_file():
    response = client.post("/parse-document")
    assert response.status_code == 400
    assert response.json()["error"] == "No file provided"


def test_file_too_large():
    response = client.post(
        "/parse-document",
        files={"file": ("big.txt", b"a" * (12 * 1024 * 1024), "text/plain")}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "File too large. Maximum size is 10MB."


def test_request_id_header():
    response = client.get("/health")
    assert response.headers["X-Request-ID"]

    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_404_handler():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    assert response.json()["path"] == "/non-existent-route"


def test_cors_headers():
    response = client.options(
        "/parse-document",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"}
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class FailingService:
    limits = ExtractionLimits()

    def extract(self, raw):
        raise RuntimeError("disk on fire")


def test_unexpected_failure_uses_error_body():
    app.dependency_overrides[get_extraction_service] = FailingService
    try:
        response = client.post(
            "/parse-document",
            files={"file": ("notes.txt", b"text", "text/plain")}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse document", "details": "disk on fire"}


def test_error_model_documented():
    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/parse-document"]["post"]["responses"]

    assert responses["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponseDTO")
    assert "500" in responses
    assert "ErrorResponseDTO" in schema["components"]["schemas"]
