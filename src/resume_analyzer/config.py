from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Resume Analyzer"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = Field(default=5000, validation_alias=AliasChoices("app_port", "port"))
    log_level: str = "INFO"
    cors_origins: str = "*"

    database_url: str = ""
    db_driver: str = "postgresql+psycopg"
    db_host: str = ""
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "resume_analyzer"
    db_ssl: bool = False
    db_pool_size: int = 20
    db_max_overflow: int = 0
    db_pool_timeout_sec: int = 2
    db_pool_recycle_sec: int = 1800
    sqlite_path: Path = Path("./data/resume_analyzer.db")

    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model_primary: str = "gpt-4o"
    openai_model_fallback: str = "gpt-4o-mini"
    openai_timeout_sec: int = 60
    llm_temperature: float = 0.3
    llm_max_output_tokens: int = 2048
    llm_json_mode: bool = True

    max_upload_bytes: int = 5 * 1024 * 1024
    max_pdf_pages: int = 10
    min_resume_chars: int = 50
    max_prompt_chars: int = 30000

    serve_static: bool = False
    static_dir: Path = Path("./frontend/build")

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.sqlalchemy_url.get_backend_name() == "sqlite"

    @property
    def sqlalchemy_url(self) -> URL:
        """Resolve the connection URL.

        A full ``DATABASE_URL`` wins. Otherwise discrete ``DB_*`` fields are used
        when ``DB_HOST`` is set, and a local SQLite file when it is not.
        """
        if self.database_url:
            url = make_url(self.database_url)
            # Managed hosts hand out postgres:// URLs; SQLAlchemy wants the dialect name.
            if url.drivername in {"postgres", "postgresql"}:
                url = url.set(drivername=self.db_driver)
        elif self.db_host:
            url = URL.create(
                drivername=self.db_driver,
                username=self.db_user or None,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )
        else:
            return URL.create("sqlite", database=str(self.sqlite_path))

        if self.db_ssl and url.get_backend_name() == "postgresql":
            url = url.update_query_dict({"sslmode": "require"})
        return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
