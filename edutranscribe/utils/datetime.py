# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for EduTranscribe.

All timestamps are stored in UTC and all Python datetimes are
timezone-aware. Calendar dates (class dates) are compared against the
current UTC date.

Usage:
    from edutranscribe.utils.datetime import utc_now

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get the current calendar date in UTC."""
    return utc_now().date()


def is_past_date(value: date, today: date | None = None) -> bool:
    """Check whether a calendar date lies strictly before today.

    Args:
        value: Date to check.
        today: Reference date. Defaults to the current UTC date.

    Returns:
        True if value is earlier than today.
    """
    return value < (today or utc_today())
