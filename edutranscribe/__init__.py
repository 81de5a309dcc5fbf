"""EduTranscribe Backend.

Teacher and student onboarding service for the EduTranscribe education
platform: teachers register, onboard students, book classes and send
registration invitations.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
