# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class scheduling domain package."""

from edutranscribe.domains.class_.service import (
    ClassBookingFailedError,
    ClassNotFoundError,
    ClassService,
    ClassServiceError,
    PastClassDateError,
)

__all__ = [
    "ClassService",
    "ClassServiceError",
    "ClassNotFoundError",
    "ClassBookingFailedError",
    "PastClassDateError",
]
