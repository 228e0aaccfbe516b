# =============================================================================
# API Tests
# =============================================================================
"""
End-to-end tests for the HTTP surface.

The application runs in process through httpx's ASGI transport with the
test database, a fake identity provider and a PDF renderer driving a
mocked browser.
"""

from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

import httpx
import pytest
from fastapi import FastAPI
from playwright.async_api import Error as PlaywrightError

from resume_api.api.main import create_app
from resume_api.database import SubscriptionTier, User
from resume_api.services.identity_client import IdentityAuthResult
from resume_api.services.pdf_service import PdfRenderer

from fakes import identity_payload, session_payload


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def pdf_page() -> AsyncMock:
    page = AsyncMock()
    page.pdf.return_value = b"%PDF-1.4 test"
    return page


@pytest.fixture
def app(db, identity, pdf_page) -> FastAPI:
    """Application wired to the test collaborators."""
    browser = AsyncMock()
    browser.new_page.return_value = pdf_page
    chromium = AsyncMock()
    chromium.launch.return_value = browser

    @asynccontextmanager
    async def fake_playwright():
        yield SimpleNamespace(chromium=chromium)

    application = create_app()
    application.state.db = db
    application.state.identity = identity
    application.state.pdf_renderer = PdfRenderer(
        timeout_seconds=5, playwright_factory=fake_playwright
    )
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def auth_headers(client, identity) -> dict[str, str]:
    """Headers of a signed in user whose local profile exists."""
    token = identity.issue_token(uuid4(), "ada@example.com", full_name="Ada Lovelace")
    headers = {"Authorization": f"Bearer {token}"}
    response = await client.get("/auth/session", headers=headers)
    assert response.status_code == 200
    return headers


@pytest.fixture
async def other_headers(client, identity) -> dict[str, str]:
    token = identity.issue_token(uuid4(), "grace@example.com")
    headers = {"Authorization": f"Bearer {token}"}
    await client.get("/auth/session", headers=headers)
    return headers


async def create_resume(client, headers, title="Backend Engineer", **fields) -> dict:
    response = await client.post("/resumes", json={"title": title, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# -----------------------------------------------------------------------------
# Health and Errors
# -----------------------------------------------------------------------------
class TestHealthAndErrors:
    """Tests for the health check and the error envelope."""

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert "timestamp" in body

    async def test_missing_token(self, client):
        response = await client.get("/resumes")

        assert response.status_code == 401
        error = response.json()["error"]
        assert error["code"] == "UNAUTHORIZED"
        assert error["message"] == "Missing or invalid authorization header"
        assert error["path"] == "/resumes"
        assert "timestamp" in error

    async def test_rejected_token(self, client):
        response = await client.get("/resumes", headers={"Authorization": "Bearer forged"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid or expired token"

    async def test_not_found_envelope(self, client, auth_headers):
        path = f"/resumes/{uuid4()}"

        response = await client.get(path, headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "error": {
                "code": "NOT_FOUND",
                "message": "Resume not found",
                "timestamp": response.json()["error"]["timestamp"],
                "path": path,
            }
        }

    async def test_validation_error(self, client, auth_headers):
        response = await client.post("/resumes", json={"title": ""}, headers=auth_headers)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["message"].startswith("title:")

    async def test_unknown_route(self, client):
        response = await client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_unexpected_exception(self, app, client):
        @app.get("/explode")
        async def explode():
            raise RuntimeError("database driver crashed")

        response = await client.get("/explode")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "INTERNAL_SERVER_ERROR"
        assert error["message"] == "Internal server error"
        assert error["path"] == "/explode"


# -----------------------------------------------------------------------------
# Auth Routes
# -----------------------------------------------------------------------------
class TestAuthRoutes:
    """Tests for /auth endpoints."""

    async def test_signup_pending_verification(self, client, identity):
        identity.sign_up.return_value = IdentityAuthResult(
            user=identity_payload(uuid4(), "new@example.com", confirmed=False),
            session=None,
        )

        response = await client.post(
            "/auth/signup",
            json={"email": "new@example.com", "password": "secret123", "fullName": "New"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user"]["email"] == "new@example.com"
        assert data["session"] is None
        assert data["requiresEmailVerification"] is True

    async def test_signup_rejects_short_password(self, client):
        response = await client.post(
            "/auth/signup",
            json={"email": "new@example.com", "password": "123"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_signin_returns_session(self, client, identity):
        user = identity_payload(uuid4(), "ada@example.com")
        identity.sign_in_with_password.return_value = IdentityAuthResult(
            user=user, session=session_payload(user)
        )

        response = await client.post(
            "/auth/signin",
            json={"email": "ada@example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["session"]["access_token"].startswith("access-")
        assert "requiresEmailVerification" not in data

    async def test_signout_requires_token(self, client):
        response = await client.post("/auth/signout")

        assert response.status_code == 401

    async def test_signout(self, client, identity):
        response = await client.post("/auth/signout", headers={"Authorization": "Bearer abc"})

        assert response.status_code == 201
        assert response.json() == {"message": "Signed out successfully"}
        identity.sign_out.assert_awaited_once_with("abc")

    async def test_reset_password(self, client, identity):
        response = await client.post("/auth/reset-password", json={"email": "ada@example.com"})

        assert response.status_code == 201
        assert response.json() == {"message": "Password reset email sent"}
        identity.reset_password_for_email.assert_awaited_once()

    async def test_refresh(self, client, identity):
        user = identity_payload(uuid4(), "ada@example.com")
        identity.refresh_session.return_value = IdentityAuthResult(
            user=user, session=session_payload(user)
        )

        response = await client.post("/auth/refresh", json={"refresh_token": "refresh-abc"})

        assert response.status_code == 201
        assert response.json()["data"]["session"]["refresh_token"].startswith("refresh-")
        identity.refresh_session.assert_awaited_once_with("refresh-abc")

    async def test_oauth_url(self, client):
        response = await client.get("/auth/oauth/github")

        assert response.status_code == 200
        assert "provider=github" in response.json()["data"]["url"]

    async def test_oauth_unsupported_provider(self, client):
        response = await client.get("/auth/oauth/myspace")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    async def test_oauth_callback_is_not_a_provider(self, client, identity):
        response = await client.get("/auth/oauth/callback")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "OAuth code is required"
        identity.exchange_code_for_session.assert_not_awaited()

    async def test_session_creates_profile(self, client, identity):
        token = identity.issue_token(uuid4(), "new@example.com")

        response = await client.get("/auth/session", headers={"Authorization": f"Bearer {token}"})

        user = response.json()["data"]["user"]
        assert user["email"] == "new@example.com"
        assert user["fullName"] == "new@example.com"
        assert user["subscriptionTier"] == "free"
        assert user["resumeCount"] == 0

    async def test_sessions(self, client, auth_headers):
        listed = await client.get("/auth/sessions", headers=auth_headers)
        revoked = await client.delete("/auth/sessions/abc", headers=auth_headers)

        assert listed.json() == {"data": []}
        assert revoked.status_code == 501
        assert revoked.json()["error"]["code"] == "NOT_IMPLEMENTED"


# -----------------------------------------------------------------------------
# Resume Routes
# -----------------------------------------------------------------------------
class TestResumeRoutes:
    """Tests for /resumes endpoints."""

    async def test_create_uses_camel_case(self, client, auth_headers):
        data = await create_resume(
            client,
            auth_headers,
            templateId="classic",
            content={"basics": {"name": "Ada"}},
        )

        assert data["templateId"] == "classic"
        assert data["status"] == "draft"
        assert data["isPublic"] is False
        assert data["viewCount"] == 0
        assert data["content"] == {"basics": {"name": "Ada"}}

    async def test_list_pagination(self, client, auth_headers):
        for title in ("A", "B", "C"):
            await create_resume(client, auth_headers, title=title)

        response = await client.get(
            "/resumes",
            params={"page": 2, "limit": 2, "sortBy": "title", "sortOrder": "asc"},
            headers=auth_headers,
        )

        body = response.json()
        assert [r["title"] for r in body["data"]] == ["C"]
        assert "content" not in body["data"][0]
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2}

    async def test_limit_out_of_range(self, client, auth_headers):
        response = await client.get("/resumes", params={"limit": 101}, headers=auth_headers)

        assert response.status_code == 400

    async def test_free_tier_limit(self, client, auth_headers):
        for title in ("One", "Two", "Three"):
            await create_resume(client, auth_headers, title=title)

        response = await client.post("/resumes", json={"title": "Four"}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "LIMIT_EXCEEDED"

    async def test_paid_tier_limit(self, client, identity, db):
        user_id = uuid4()
        async with db.session() as session:
            session.add(
                User(
                    id=user_id,
                    email="pro@example.com",
                    full_name="Pro",
                    subscription_tier=SubscriptionTier.BASIC.value,
                )
            )
        headers = {"Authorization": f"Bearer {identity.issue_token(user_id, 'pro@example.com')}"}

        for i in range(4):
            await create_resume(client, headers, title=f"Resume {i}")

        stats = await client.get("/users/me/stats", headers=headers)
        assert stats.json()["data"]["resumeCount"] == 4

    async def test_search(self, client, auth_headers):
        await create_resume(client, auth_headers, title="Data Engineer")
        await create_resume(client, auth_headers, title="Designer")

        response = await client.get("/resumes/search", params={"q": "engineer"}, headers=auth_headers)

        body = response.json()
        assert [r["title"] for r in body["data"]] == ["Data Engineer"]
        assert body["pagination"]["total"] == 1

    async def test_update_and_delete(self, client, auth_headers):
        resume = await create_resume(client, auth_headers)
        path = f"/resumes/{resume['id']}"

        updated = await client.put(path, json={"status": "published"}, headers=auth_headers)
        deleted = await client.delete(path, headers=auth_headers)
        missing = await client.get(path, headers=auth_headers)

        assert updated.json()["data"]["status"] == "published"
        assert updated.json()["data"]["title"] == "Backend Engineer"
        assert deleted.json() == {"message": "Resume deleted successfully"}
        assert missing.status_code == 404

    async def test_foreign_resume_is_not_found(self, client, auth_headers, other_headers):
        resume = await create_resume(client, auth_headers)

        response = await client.get(f"/resumes/{resume['id']}", headers=other_headers)

        assert response.status_code == 404

    async def test_duplicate(self, client, auth_headers):
        resume = await create_resume(client, auth_headers, content={"x": 1})

        response = await client.post(f"/resumes/{resume['id']}/duplicate", headers=auth_headers)

        assert response.status_code == 201
        copy = response.json()["data"]
        assert copy["title"] == "Backend Engineer (Copy)"
        assert copy["content"] == {"x": 1}
        assert copy["id"] != resume["id"]

    async def test_export_and_import(self, client, auth_headers):
        resume = await create_resume(client, auth_headers, content={"summary": "hi"})

        exported = await client.get(f"/resumes/{resume['id']}/export", headers=auth_headers)
        envelope = exported.json()["data"]
        imported = await client.post("/resumes/import", json=envelope, headers=auth_headers)

        assert envelope["version"] == "1.0"
        assert envelope["resume"]["content"] == {"summary": "hi"}
        assert imported.status_code == 201
        assert imported.json()["data"]["content"] == {"summary": "hi"}
        assert imported.json()["data"]["status"] == "draft"

    async def test_import_unsupported_version(self, client, auth_headers):
        response = await client.post(
            "/resumes/import",
            json={"version": "2.0", "resume": {"title": "CV", "content": {}}},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_VERSION"

    async def test_bulk_export(self, client, auth_headers):
        first = await create_resume(client, auth_headers, title="First")
        await create_resume(client, auth_headers, title="Second")

        everything = await client.post("/resumes/bulk-export", headers=auth_headers)
        subset = await client.post(
            "/resumes/bulk-export",
            json={"resumeIds": [first["id"]]},
            headers=auth_headers,
        )

        assert everything.status_code == 201
        assert len(everything.json()["data"]["resumes"]) == 2
        assert [r["title"] for r in subset.json()["data"]["resumes"]] == ["First"]


# -----------------------------------------------------------------------------
# Versions and Sharing
# -----------------------------------------------------------------------------
class TestVersionRoutes:
    """Tests for /resumes/{id}/versions endpoints."""

    async def test_snapshot_and_restore(self, client, auth_headers):
        resume = await create_resume(client, auth_headers, content={"summary": "v1"})
        base = f"/resumes/{resume['id']}/versions"

        created = await client.post(base, json={"versionName": "First"}, headers=auth_headers)
        await client.put(
            f"/resumes/{resume['id']}",
            json={"content": {"summary": "v2"}},
            headers=auth_headers,
        )
        version_id = created.json()["data"]["id"]
        restored = await client.post(f"{base}/{version_id}/restore", headers=auth_headers)
        listed = await client.get(base, headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["data"]["versionNumber"] == 1
        assert restored.status_code == 201
        assert restored.json()["data"]["content"] == {"summary": "v1"}
        assert [v["versionName"] for v in listed.json()["data"]] == ["First"]

    async def test_foreign_versions_are_forbidden(self, client, auth_headers, other_headers):
        resume = await create_resume(client, auth_headers)

        response = await client.get(f"/resumes/{resume['id']}/versions", headers=other_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Access denied"


class TestSharingRoutes:
    """Tests for sharing, the public page and analytics."""

    async def test_public_link_counts_views(self, client, auth_headers):
        resume = await create_resume(client, auth_headers, content={"summary": "public"})

        shared = await client.post(f"/resumes/{resume['id']}/share", headers=auth_headers)
        slug = shared.json()["data"]["slug"]
        first = await client.get(f"/public/{slug}")
        second = await client.get(f"/public/{slug}")
        analytics = await client.get(f"/resumes/{resume['id']}/analytics", headers=auth_headers)

        assert shared.status_code == 201
        assert shared.json()["data"]["url"].endswith(f"/public/{slug}")
        assert first.json()["data"]["viewCount"] == 1
        assert second.json()["data"]["viewCount"] == 2
        assert second.json()["data"]["content"] == {"summary": "public"}
        assert analytics.json()["data"]["viewCount"] == 2

    async def test_unshare_hides_public_page(self, client, auth_headers):
        resume = await create_resume(client, auth_headers)
        shared = await client.post(f"/resumes/{resume['id']}/share", headers=auth_headers)

        unshared = await client.post(f"/resumes/{resume['id']}/unshare", headers=auth_headers)
        response = await client.get(f"/public/{shared.json()['data']['slug']}")

        assert unshared.status_code == 201
        assert unshared.json() == {"message": "Resume unshared successfully"}
        assert response.status_code == 404


# -----------------------------------------------------------------------------
# Users and PDF Export
# -----------------------------------------------------------------------------
class TestUserRoutes:
    """Tests for /users/me endpoints."""

    async def test_profile_update_and_delete(self, client, auth_headers):
        profile = await client.get("/users/me", headers=auth_headers)
        updated = await client.put(
            "/users/me", json={"fullName": "Ada King"}, headers=auth_headers
        )
        deleted = await client.delete("/users/me", headers=auth_headers)

        assert profile.json()["data"]["fullName"] == "Ada Lovelace"
        assert updated.json()["data"]["fullName"] == "Ada King"
        assert deleted.json() == {"message": "Account deleted successfully"}

    async def test_stats(self, client, auth_headers):
        await create_resume(client, auth_headers)

        response = await client.get("/users/me/stats", headers=auth_headers)

        assert response.json()["data"] == {
            "resumeCount": 1,
            "exportCount": 0,
            "storageUsedBytes": 0,
            "subscriptionTier": "free",
            "subscriptionStatus": "active",
        }


class TestPdfExportRoute:
    """Tests for POST /resumes/export."""

    async def test_returns_pdf_attachment(self, client, auth_headers, pdf_page):
        response = await client.post(
            "/resumes/export",
            json={"html": "<h1>Ada</h1>", "css": "h1 { color: navy; }"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="resume.pdf"'
        assert response.content == b"%PDF-1.4 test"
        assert "h1 { color: navy; }" in pdf_page.set_content.await_args.args[0]

    async def test_requires_token(self, client):
        response = await client.post("/resumes/export", json={"html": "<p>x</p>"})

        assert response.status_code == 401

    async def test_empty_html(self, client, auth_headers):
        response = await client.post("/resumes/export", json={"html": ""}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "HTML content is required"

    async def test_render_failure(self, client, auth_headers, pdf_page):
        pdf_page.pdf.side_effect = PlaywrightError("Browser crashed")

        response = await client.post(
            "/resumes/export", json={"html": "<p>x</p>"}, headers=auth_headers
        )

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "RENDER_FAILED"
        assert error["message"] == "Failed to generate PDF"
        assert error["details"] == "Browser crashed"
