# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    onboarding: Student onboarding endpoint.
    teachers: Teacher registration and roster endpoints.
    invitations: Invitation listing, resend and acceptance.
    students: Student self-registration and own profile.
    classes: Class calendar endpoints.
"""

from fastapi import APIRouter

from edutranscribe.api.v1 import classes, invitations, onboarding, students, teachers

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(onboarding.router, prefix="/onboarding", tags=["Onboarding"])
router.include_router(teachers.router, prefix="/teachers", tags=["Teachers"])
router.include_router(invitations.router, prefix="/invitations", tags=["Invitations"])
router.include_router(students.router, prefix="/students", tags=["Students"])
router.include_router(classes.router, prefix="/classes", tags=["Classes"])
