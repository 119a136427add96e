from __future__ import annotations

import json
from pathlib import Path

import typer
import uvicorn

from resume_analyzer.api.app import create_app
from resume_analyzer.config import get_settings
from resume_analyzer.core.pipeline import analyze_pdf
from resume_analyzer.db.init import init_database, reset_database
from resume_analyzer.db.repositories import ResumeRepository
from resume_analyzer.db.seed import seed_sample_resumes
from resume_analyzer.db.session import create_db_engine, create_session_factory, session_scope
from resume_analyzer.errors import ResumeAnalyzerError
from resume_analyzer.llm.analyzer import ResumeAnalyzer
from resume_analyzer.logging_config import configure_logging

app = typer.Typer(help="Resume Analyzer CLI")


@app.command("init-db")
def init_db_cmd() -> None:
    """Create the resumes table if it does not exist."""
    configure_logging()
    engine = create_db_engine(get_settings())
    try:
        init_database(engine)
    finally:
        engine.dispose()
    typer.echo(json.dumps({"ok": True, "database": engine.url.render_as_string(hide_password=True)}, indent=2))


@app.command("seed")
def seed_cmd() -> None:
    """Insert the bundled sample resumes."""
    configure_logging()
    engine = create_db_engine(get_settings())
    try:
        init_database(engine)
        with session_scope(create_session_factory(engine)) as db:
            inserted = seed_sample_resumes(db)
            total = ResumeRepository(db).count()
    finally:
        engine.dispose()
    typer.echo(json.dumps({"inserted": inserted, "total": total}, indent=2))


@app.command("reset-db")
def reset_db_cmd(yes: bool = typer.Option(False, "--yes", help="Confirm dropping all stored resumes")) -> None:
    """Drop and recreate the resumes table."""
    configure_logging()
    if not yes:
        typer.echo("Refusing to drop data without --yes", err=True)
        raise typer.Exit(code=1)
    engine = create_db_engine(get_settings())
    try:
        reset_database(engine)
    finally:
        engine.dispose()
    typer.echo(json.dumps({"ok": True}, indent=2))


@app.command("analyze")
def analyze_cmd(
    file: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    save: bool = typer.Option(False, "--save", help="Store the analysis in the database"),
) -> None:
    """Analyze a local PDF resume and print the normalized result."""
    configure_logging()
    settings = get_settings()
    data = file.read_bytes()

    try:
        analysis = analyze_pdf(data, analyzer=ResumeAnalyzer(settings), settings=settings)
    except ResumeAnalyzerError as exc:
        typer.echo(json.dumps({"success": False, "error": exc.message, "details": exc.details}, indent=2), err=True)
        raise typer.Exit(code=1) from exc

    output = {
        "success": True,
        "data": analysis.to_wire(),
        "missingContactFields": analysis.personal_info.missing_fields(),
    }
    if save:
        engine = create_db_engine(settings)
        try:
            init_database(engine)
            with session_scope(create_session_factory(engine)) as db:
                record = ResumeRepository(db).create(analysis, file_name=file.name, file_size=len(data))
                output["data"]["id"] = record.id
        finally:
            engine.dispose()
    typer.echo(json.dumps(output, indent=2))


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes (development only)"),
) -> None:
    configure_logging()
    settings = get_settings()
    host = host or settings.app_host
    port = port or settings.app_port
    if reload:
        # Reload mode needs an import string, not an app instance.
        uvicorn.run("resume_analyzer.api.app:create_app", factory=True, host=host, port=port, reload=True)
        return
    uvicorn.run(create_app(settings), host=host, port=port)
