# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for EduTranscribe.

Example:
    >>> from edutranscribe.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from edutranscribe.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    InvitationSettings,
    JWTSettings,
    RateLimitSettings,
    Settings,
    SMTPSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "JWTSettings",
    "SMTPSettings",
    "InvitationSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
]
