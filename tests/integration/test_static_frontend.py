from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from resume_analyzer.api.app import create_app
from resume_analyzer.config import Settings


def test_built_frontend_is_served_with_client_side_routes(settings: Settings, tmp_path: Path) -> None:
    build_dir = tmp_path / "build"
    build_dir.mkdir()
    (build_dir / "index.html").write_text("<html><body>resume analyzer ui</body></html>", encoding="utf-8")
    (build_dir / "app.js").write_text("console.log('ok');", encoding="utf-8")
    settings.serve_static = True
    settings.static_dir = build_dir

    with TestClient(create_app(settings)) as client:
        assert "resume analyzer ui" in client.get("/").text
        assert "console.log" in client.get("/app.js").text
        assert "resume analyzer ui" in client.get("/resumes/42").text
        assert client.get("/api/health").json()["status"] == "ok"


def test_missing_build_directory_is_skipped(settings: Settings, tmp_path: Path) -> None:
    settings.serve_static = True
    settings.static_dir = tmp_path / "does-not-exist"

    with TestClient(create_app(settings)) as client:
        assert client.get("/").status_code == 404
        assert client.get("/api/health").status_code == 200
