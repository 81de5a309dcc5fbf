# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for driving the full application with TestClient.

Each test gets a fresh file-backed SQLite database created by the
application lifespan, and an invitation notifier that records instead of
sending e-mail.
"""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from edutranscribe.api import create_app
from edutranscribe.api.dependencies import get_notifier
from edutranscribe.core.config import clear_settings_cache, get_settings
from edutranscribe.domains.auth.jwt import JWTManager
from edutranscribe.infrastructure.notifications import InvitationNotifier
from tests.factories import RecordingChannel

TokenFactory = Callable[..., dict[str, str]]


@pytest.fixture
def api_channel() -> RecordingChannel:
    """Recording channel used by the app under test."""
    return RecordingChannel()


@pytest.fixture
def api_client(
    tmp_path, monkeypatch: pytest.MonkeyPatch, api_channel: RecordingChannel
) -> Generator[TestClient, None, None]:
    """Run the application against a temporary SQLite database."""
    monkeypatch.setenv("DB_URL", f"sqlite+aiosqlite:///{tmp_path}/edutranscribe.db")
    monkeypatch.setenv("DB_CREATE_TABLES", "true")
    monkeypatch.setenv("SMTP_HOST", "")
    clear_settings_cache()

    app = create_app()
    notifier = InvitationNotifier(api_channel, "https://app.edutranscribe.test")
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as client:
        yield client

    clear_settings_cache()


@pytest.fixture
def auth_headers(api_client: TestClient) -> TokenFactory:
    """Mint bearer headers with the application's JWT secret."""
    manager = JWTManager(get_settings().jwt)

    def _headers(user_id: str, role: str | None = None, email: str | None = None) -> dict[str, str]:
        token = manager.create_access_token(user_id=user_id, role=role, email=email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def teacher_headers(api_client: TestClient, auth_headers: TokenFactory) -> dict[str, str]:
    """Register teacher-1 through the API and return its headers."""
    headers = auth_headers("teacher-1", role="teacher", email="maria@example.com")
    response = api_client.post(
        "/api/v1/teachers",
        json={"full_name": "María López", "email": "maria@example.com", "subject": "Matemáticas"},
        headers=headers,
    )
    assert response.status_code == 201
    return headers


@pytest.fixture
def teacher_code(api_client: TestClient, teacher_headers: dict[str, str]) -> str:
    """Teacher code allocated to teacher-1."""
    return api_client.get("/api/v1/teachers/me", headers=teacher_headers).json()["teacher_code"]
