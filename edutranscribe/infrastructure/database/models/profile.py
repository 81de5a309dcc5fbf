# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity and enrollment tables: profiles, teachers and students.

Students reference their teacher through the denormalized teacher_code
string rather than a foreign key, so that self-registered students can
sit under the UNASSIGNED sentinel until a teacher claims them. The
(profile_id, teacher_code) uniqueness constraint is what makes concurrent
onboarding of the same person safe.
"""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from edutranscribe.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)

UNASSIGNED_TEACHER_CODE = "UNASSIGNED"


class Profile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Canonical identity record for any person, teacher or student."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("role IN ('teacher', 'student')", name="valid_profile_role"),
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Teacher(TimestampMixin, Base):
    """Teacher record keyed by the same id as its profile and auth principal."""

    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    teacher_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    school_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subject: Mapped[str | None] = mapped_column(String(255), nullable=True)


class Student(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Enrollment link between a profile and one teacher_code."""

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("profile_id", "teacher_code", name="uq_students_profile_teacher_code"),
    )

    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    teacher_code: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    grade: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_registered: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
