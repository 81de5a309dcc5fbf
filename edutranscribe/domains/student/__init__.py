# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student domain package."""

from edutranscribe.domains.student.service import (
    StudentAlreadyRegisteredError,
    StudentService,
    StudentServiceError,
)

__all__ = [
    "StudentService",
    "StudentServiceError",
    "StudentAlreadyRegisteredError",
]
