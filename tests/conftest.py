# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests run services against an in-memory SQLite database
- Integration tests drive the FastAPI app with TestClient
"""

import os

# Settings are read at import time by the rate limiter
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SMTP_HOST", "")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from edutranscribe.infrastructure.database import create_tables
from edutranscribe.infrastructure.notifications import InvitationNotifier
from tests.factories import RecordingChannel


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session configured like the application's sessionmaker."""
    sessionmaker = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with sessionmaker() as session:
        yield session


# =============================================================================
# Notification Fixtures
# =============================================================================


@pytest.fixture
def channel() -> RecordingChannel:
    """Provide a recording channel that always succeeds."""
    return RecordingChannel()


@pytest.fixture
def notifier(channel: RecordingChannel) -> InvitationNotifier:
    """Provide an invitation notifier backed by the recording channel."""
    return InvitationNotifier(channel=channel, registration_base_url="https://app.edutranscribe.test/")


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
