from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from resume_analyzer.api.app import create_app
from resume_analyzer.config import Settings
from resume_analyzer.db.init import init_database
from resume_analyzer.db.session import create_db_engine, create_session_factory, session_scope
from resume_analyzer.llm.analyzer import ResumeAnalyzer
from resume_analyzer.llm.providers import ModelResponse

SAMPLE_RESUME_TEXT = (
    "Jane Smith\n"
    "jane.smith@example.com | +1 555 987 6543\n"
    "Frontend developer with 3 years of experience building React applications.\n"
    "Digital Creations - Frontend Developer - 2019 to Present\n"
    "Built responsive web applications using React and Redux."
)

MODEL_PAYLOAD = {
    "personalInfo": {
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "phone": "+1 555 987 6543",
        "linkedin": "",
        "portfolio": None,
    },
    "summary": "Frontend developer with 3 years of experience.",
    "workExperience": [
        {
            "jobTitle": "Frontend Developer",
            "company": "Digital Creations",
            "startDate": "2019",
            "endDate": "Present",
            "responsibilities": ["Built responsive web applications using React and Redux"],
        }
    ],
    "education": [],
    "skills": {"technical": ["React", "Redux"], "soft": ["Collaboration"]},
    "analysis": {
        "rating": 7,
        "strengths": ["Focused frontend experience"],
        "improvementAreas": ["Add measurable outcomes"],
        "skillGaps": ["TypeScript"],
        "recommendations": ["Learn TypeScript"],
    },
}


class ScriptedProvider:
    """Replays canned replies in order; the last reply repeats once the script runs out."""

    def __init__(self, *replies: str | Exception):
        self.replies = list(replies) or [json.dumps(MODEL_PAYLOAD)]
        self.calls: list[str] = []

    def complete_text(self, *, model: str, prompt: str) -> ModelResponse:
        self.calls.append(model)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return ModelResponse(content=reply, model=model, raw={})


def _escape_pdf_text(line: str) -> str:
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(*pages: str) -> bytes:
    """Build a minimal single-font PDF with one text page per argument."""
    font_id = 3 + 2 * len(pages)
    objects: list[bytes] = [b"<< /Type /Catalog /Pages 2 0 R >>", b""]
    kids: list[str] = []
    for index, text in enumerate(pages):
        page_id = 3 + 2 * index
        kids.append(f"{page_id} 0 R")
        ops = ["BT", "/F1 11 Tf", "14 TL", "72 740 Td"]
        ops.extend(f"({_escape_pdf_text(line)}) Tj T*" for line in text.splitlines())
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {page_id + 1} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")
    objects[1] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(pages)} >>".encode()
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def resume_pdf() -> bytes:
    return build_pdf(SAMPLE_RESUME_TEXT)


@pytest.fixture
def model_payload() -> dict:
    return json.loads(json.dumps(MODEL_PAYLOAD))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        app_env="test",
        database_url="",
        db_host="",
        sqlite_path=tmp_path / "resumes.db",
        openai_api_key="",
        serve_static=False,
    )


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def analyzer(settings: Settings, provider: ScriptedProvider) -> ResumeAnalyzer:
    return ResumeAnalyzer(settings, provider=provider)


@pytest.fixture
def client(settings: Settings, analyzer: ResumeAnalyzer) -> Iterator[TestClient]:
    app = create_app(settings, analyzer=analyzer)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(settings: Settings) -> Iterator[Session]:
    engine = create_db_engine(settings)
    init_database(engine)
    with session_scope(create_session_factory(engine)) as session:
        yield session
    engine.dispose()
