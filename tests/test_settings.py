# =============================================================================
# Settings Tests
# =============================================================================
"""
Tests for environment-driven configuration.
"""

import pytest

from resume_api.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("AWS_LAMBDA_FUNCTION_NAME", "VERCEL", "NETLIFY", "PDF_SERVERLESS"):
        monkeypatch.delenv(name, raising=False)


def test_database_url_from_parts():
    settings = Settings(
        _env_file=None,
        postgres_user="resume",
        postgres_password="secret",
        postgres_host="db",
        postgres_port=5433,
        postgres_db="resumes",
    )

    assert settings.database_url == "postgresql+asyncpg://resume:secret@db:5433/resumes"


def test_database_url_override():
    settings = Settings(_env_file=None, database_url_override="sqlite+aiosqlite:///local.db")

    assert settings.database_url == "sqlite+aiosqlite:///local.db"


def test_cors_origins_list():
    settings = Settings(_env_file=None, cors_origins=" https://a.example.com, ,http://localhost:3000 ")

    assert settings.cors_origins_list == ["https://a.example.com", "http://localhost:3000"]


def test_urls_lose_trailing_slash():
    settings = Settings(
        _env_file=None,
        frontend_url="https://app.example.com/",
        supabase_url="https://project.supabase.co//",
    )

    assert settings.frontend_url == "https://app.example.com"
    assert settings.supabase_url == "https://project.supabase.co"


def test_serverless_detected_from_environment(monkeypatch):
    assert Settings(_env_file=None).is_serverless is False

    monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "resume-api")

    assert Settings(_env_file=None).is_serverless is True


def test_serverless_setting_wins(monkeypatch):
    monkeypatch.setenv("VERCEL", "1")

    assert Settings(_env_file=None, pdf_serverless=False).is_serverless is False
