# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Profile response models."""

from typing import Literal

from pydantic import BaseModel

ProfileRole = Literal["teacher", "student"]


class ProfileResponse(BaseModel):
    """Identity of a person as shown to clients."""

    id: str
    email: str
    full_name: str
    role: ProfileRole
    avatar_url: str
