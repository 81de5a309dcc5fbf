# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the authentication middleware and role dependencies.

Tests the middleware in isolation from the database.
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from pydantic import SecretStr

from edutranscribe.api.dependencies import StudentUser, TeacherUser
from edutranscribe.api.middleware.auth import AuthMiddleware, get_current_user
from edutranscribe.domains.auth.jwt import JWTManager


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    return settings


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


@pytest.fixture
def client(jwt_manager: JWTManager) -> TestClient:
    """Create a bare app with the auth middleware and probe routes."""
    app = FastAPI()
    app.add_middleware(AuthMiddleware, jwt_manager=jwt_manager)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/whoami")
    async def whoami(request: Request) -> dict:
        user = get_current_user(request)
        if user is None:
            return {"user": None}
        return {"user": user.id, "role": user.role, "email": user.email}

    @app.get("/teacher-only")
    async def teacher_only(current_user: TeacherUser) -> dict:
        return {"user": current_user.id}

    @app.get("/student-only")
    async def student_only(current_user: StudentUser) -> dict:
        return {"user": current_user.id}

    return TestClient(app)


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestAuthMiddleware:
    """Tests for AuthMiddleware."""

    def test_public_path_bypasses_auth(self, client: TestClient) -> None:
        """Test that public paths don't need a token."""
        response = client.get("/health")

        assert response.status_code == 200

    def test_valid_token_sets_user(self, client: TestClient, jwt_manager: JWTManager) -> None:
        """Test that a valid token sets request.state.user."""
        token = jwt_manager.create_access_token(
            user_id="teacher-1", role="teacher", email="maria@example.com"
        )

        response = client.get("/whoami", headers=_bearer(token))

        assert response.status_code == 200
        assert response.json() == {
            "user": "teacher-1",
            "role": "teacher",
            "email": "maria@example.com",
        }

    def test_missing_token_leaves_user_empty(self, client: TestClient) -> None:
        """Test that no Authorization header means no principal."""
        response = client.get("/whoami")

        assert response.json() == {"user": None}

    def test_invalid_token_leaves_user_empty(self, client: TestClient) -> None:
        """Test that a garbage token means no principal."""
        response = client.get("/whoami", headers=_bearer("invalid.token.here"))

        assert response.json() == {"user": None}

    def test_expired_token_leaves_user_empty(
        self, client: TestClient, jwt_manager: JWTManager
    ) -> None:
        """Test that an expired token means no principal."""
        token = jwt_manager.create_access_token(
            user_id="teacher-1", role="teacher", expires_in=timedelta(seconds=-10)
        )

        response = client.get("/whoami", headers=_bearer(token))

        assert response.json() == {"user": None}

    def test_non_bearer_scheme_is_ignored(self, client: TestClient) -> None:
        """Test that only Bearer credentials are read."""
        response = client.get("/whoami", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.json() == {"user": None}


class TestRoleDependencies:
    """Tests for role-enforcing dependencies."""

    def test_teacher_route_without_token(self, client: TestClient) -> None:
        """Test that an anonymous caller gets 401."""
        response = client.get("/teacher-only")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_teacher_route_with_student(
        self, client: TestClient, jwt_manager: JWTManager
    ) -> None:
        """Test that a student is refused teacher routes."""
        token = jwt_manager.create_access_token(user_id="student-1", role="student")

        response = client.get("/teacher-only", headers=_bearer(token))

        assert response.status_code == 403
        assert response.json()["detail"] == "Teacher access required"

    def test_teacher_route_with_teacher(
        self, client: TestClient, jwt_manager: JWTManager
    ) -> None:
        """Test that a teacher passes."""
        token = jwt_manager.create_access_token(user_id="teacher-1", role="teacher")

        response = client.get("/teacher-only", headers=_bearer(token))

        assert response.status_code == 200
        assert response.json() == {"user": "teacher-1"}

    def test_student_route_without_role(
        self, client: TestClient, jwt_manager: JWTManager
    ) -> None:
        """Test that an unregistered principal is refused student routes."""
        token = jwt_manager.create_access_token(user_id="new-user")

        response = client.get("/student-only", headers=_bearer(token))

        assert response.status_code == 403
