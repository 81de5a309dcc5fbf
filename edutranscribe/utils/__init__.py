# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for EduTranscribe.

- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from edutranscribe.utils.datetime import is_past_date, utc_now, utc_today
from edutranscribe.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "utc_today",
    "is_past_date",
]
