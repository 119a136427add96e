from __future__ import annotations

import pytest
from conftest import MODEL_PAYLOAD, ScriptedProvider
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from resume_analyzer.config import Settings
from resume_analyzer.core.normalizer import normalize_analysis
from resume_analyzer.db.repositories import ResumeRepository


def _store(db: Session, count: int, name_prefix: str = "Candidate") -> list[int]:
    repo = ResumeRepository(db)
    ids = []
    for index in range(count):
        payload = dict(MODEL_PAYLOAD, personalInfo={"name": f"{name_prefix} {index}"})
        row = repo.create(normalize_analysis(payload), file_name=f"resume_{index}.pdf", file_size=1000 + index)
        ids.append(row.id)
    return ids


def _total(client: TestClient) -> int:
    return client.get("/api/resumes").json()["pagination"]["total"]


def test_health_reports_database_and_environment(client: TestClient) -> None:
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["message"] == "Server is running"
    assert body["database"] == "connected"
    assert body["environment"] == "test"
    assert body["timestamp"]


def test_upload_analyzes_and_stores_resume(client: TestClient, provider: ScriptedProvider, resume_pdf: bytes) -> None:
    resp = client.post("/api/resumes/upload", files={"file": ("jane.pdf", resume_pdf, "application/pdf")})

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert isinstance(data["id"], int)
    assert data["personalInfo"]["name"] == "Jane Smith"
    assert data["personalInfo"]["linkedin"] == "Not provided"
    assert data["workExperience"][0]["jobTitle"] == "Frontend Developer"
    assert data["analysis"]["rating"] == 7
    assert len(provider.calls) == 1

    stored = client.get(f"/api/resumes/{data['id']}").json()["data"]
    assert stored["file_name"] == "jane.pdf"
    assert stored["file_size"] == len(resume_pdf)
    assert stored["file_type"] == "application/pdf"
    assert stored["status"] == "completed"
    assert stored["email"] == "jane.smith@example.com"
    assert stored["technical_skills"] == ["React", "Redux"]
    assert stored["improvement_areas"] == ["Add measurable outcomes"]
    assert stored["upskill_suggestions"] == ["Learn TypeScript"]
    assert stored["resume_rating"] == 7
    assert stored["analysis_result"]["skillGaps"] == ["TypeScript"]


def test_upload_without_file_field_is_rejected(client: TestClient, provider: ScriptedProvider) -> None:
    resp = client.post("/api/resumes/upload", files={"document": ("jane.pdf", b"%PDF-1.4", "application/pdf")})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "No file uploaded. Please upload a PDF file."}
    assert provider.calls == []


def test_non_pdf_upload_is_rejected_without_storing(client: TestClient, provider: ScriptedProvider) -> None:
    resp = client.post("/api/resumes/upload", files={"file": ("notes.txt", b"plain text resume", "text/plain")})

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert provider.calls == []
    assert _total(client) == 0


def test_empty_upload_is_rejected_before_analysis(client: TestClient, provider: ScriptedProvider) -> None:
    resp = client.post("/api/resumes/upload", files={"file": ("empty.pdf", b"", "application/pdf")})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Empty file provided"
    assert provider.calls == []


def test_oversized_upload_is_rejected(client: TestClient, settings: Settings, provider: ScriptedProvider) -> None:
    settings.max_upload_bytes = 1024

    resp = client.post("/api/resumes/upload", files={"file": ("big.pdf", b"%PDF-" + b"0" * 4096, "application/pdf")})

    assert resp.status_code == 400
    assert "maximum limit" in resp.json()["error"]
    assert provider.calls == []


@pytest.mark.parametrize(
    ("content", "error"),
    [
        (b"not really a pdf", "Failed to read PDF"),
        (None, "too short"),
    ],
)
def test_unusable_pdf_content_is_unprocessable(
    client: TestClient, provider: ScriptedProvider, make_pdf, content, error
) -> None:
    data = content if content is not None else make_pdf("Hi")

    resp = client.post("/api/resumes/upload", files={"file": ("cv.pdf", data, "application/pdf")})

    assert resp.status_code == 422
    assert error in resp.json()["error"]
    assert provider.calls == []
    assert _total(client) == 0


def test_analysis_failure_stores_nothing(client: TestClient, provider: ScriptedProvider, resume_pdf: bytes) -> None:
    provider.replies = ["I cannot help with that."]

    resp = client.post("/api/resumes/upload", files={"file": ("jane.pdf", resume_pdf, "application/pdf")})

    assert resp.status_code == 500
    assert resp.json()["success"] is False
    assert _total(client) == 0


def test_list_paginates_newest_first(client: TestClient, db_session: Session) -> None:
    ids = _store(db_session, 12)

    resp = client.get("/api/resumes", params={"page": 2, "limit": 5})

    assert resp.status_code == 200
    body = resp.json()
    assert [row["id"] for row in body["data"]] == list(reversed(ids))[5:10]
    assert body["pagination"] == {
        "page": 2,
        "limit": 5,
        "total": 12,
        "totalPages": 3,
        "hasNext": True,
        "hasPrevious": True,
        "nextPage": 3,
        "previousPage": 1,
    }


def test_list_defaults_and_search(client: TestClient, db_session: Session) -> None:
    _store(db_session, 3, name_prefix="Candidate")
    _store(db_session, 2, name_prefix="Jordan")

    default = client.get("/api/resumes").json()
    assert default["pagination"]["page"] == 1
    assert default["pagination"]["limit"] == 10
    assert default["pagination"]["total"] == 5

    found = client.get("/api/resumes", params={"search": "jordan"}).json()
    assert found["pagination"]["total"] == 2
    assert all(row["name"].startswith("Jordan") for row in found["data"])

    # Wildcards are matched literally.
    assert client.get("/api/resumes", params={"search": "%"}).json()["pagination"]["total"] == 0


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "x"}])
def test_list_rejects_invalid_query(client: TestClient, params: dict) -> None:
    resp = client.get("/api/resumes", params=params)

    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["error"].startswith("Invalid request: query.")
    assert "detail" not in body


def test_get_is_idempotent_and_missing_is_404(client: TestClient, db_session: Session) -> None:
    [resume_id] = _store(db_session, 1)

    first = client.get(f"/api/resumes/{resume_id}")
    second = client.get(f"/api/resumes/{resume_id}")
    assert first.status_code == 200
    assert first.json() == second.json()

    missing = client.get("/api/resumes/99999")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "Resume not found"}


def test_update_applies_whitelisted_fields_only(client: TestClient, db_session: Session) -> None:
    [resume_id] = _store(db_session, 1)
    before = client.get(f"/api/resumes/{resume_id}").json()["data"]

    resp = client.put(
        f"/api/resumes/{resume_id}",
        json={"summary": "Updated summary", "resume_rating": 9, "file_name": "hacked.pdf"},
    )

    assert resp.status_code == 200
    after = resp.json()["data"]
    assert after["summary"] == "Updated summary"
    assert after["resume_rating"] == 9
    assert after["file_name"] == before["file_name"]
    assert after["uploaded_at"] == before["uploaded_at"]
    assert after["updated_at"] != before["updated_at"]


def test_update_without_valid_fields_changes_nothing(client: TestClient, db_session: Session) -> None:
    [resume_id] = _store(db_session, 1)
    before = client.get(f"/api/resumes/{resume_id}").json()

    resp = client.put(f"/api/resumes/{resume_id}", json={"foo": "bar"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "No valid fields provided for update"
    assert client.get(f"/api/resumes/{resume_id}").json() == before


def test_update_rejects_out_of_range_rating_and_missing_row(client: TestClient, db_session: Session) -> None:
    [resume_id] = _store(db_session, 1)

    out_of_range = client.put(f"/api/resumes/{resume_id}", json={"resume_rating": 11})
    assert out_of_range.status_code == 422
    assert out_of_range.json()["success"] is False
    assert "resume_rating" in out_of_range.json()["error"]
    assert client.put("/api/resumes/99999", json={"summary": "x"}).status_code == 404
    # Missing row wins over an empty update.
    assert client.put("/api/resumes/99999", json={"foo": "bar"}).status_code == 404


def test_delete_removes_row_and_missing_is_404(client: TestClient, db_session: Session) -> None:
    ids = _store(db_session, 2)

    missing = client.delete("/api/resumes/99999")
    assert missing.status_code == 404
    assert _total(client) == 2

    resp = client.delete(f"/api/resumes/{ids[0]}")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Resume deleted successfully"}
    assert client.get(f"/api/resumes/{ids[0]}").status_code == 404
    assert _total(client) == 1
