# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database models.

Tests table definitions, constraints and enum values.
"""

import pytest
from sqlalchemy import UniqueConstraint

from edutranscribe.infrastructure.database.models import (
    ALLOWED_DURATIONS,
    DEFAULT_DURATION,
    UNASSIGNED_TEACHER_CODE,
    Base,
    ClassStatus,
    PaymentStatus,
    Profile,
    ScheduledClass,
    Student,
    StudentInvitation,
    Teacher,
    TimestampMixin,
)


class TestBase:
    """Test base model functionality."""

    def test_base_inherits_declarative_base(self):
        """Verify Base is a declarative base."""
        assert hasattr(Base, "metadata")
        assert hasattr(Base, "registry")

    def test_timestamp_mixin_has_created_at(self):
        """Verify TimestampMixin has created_at field."""
        assert hasattr(TimestampMixin, "created_at")
        assert hasattr(TimestampMixin, "updated_at")

    def test_all_tables_registered(self):
        """Verify every table is part of the metadata."""
        assert set(Base.metadata.tables) == {
            "profiles",
            "teachers",
            "students",
            "student_invitations",
            "classes",
        }


class TestProfileModels:
    """Test profile, teacher and student tables."""

    def test_profile_email_is_unique(self):
        """Verify profiles.email carries a unique constraint."""
        assert Profile.__table__.c.email.unique is True

    def test_teacher_code_is_unique(self):
        """Verify teachers.teacher_code carries a unique constraint."""
        assert Teacher.__table__.c.teacher_code.unique is True

    def test_teacher_id_references_profile(self):
        """Verify the teacher id is the profile id."""
        fks = {fk.target_fullname for fk in Teacher.__table__.c.id.foreign_keys}
        assert fks == {"profiles.id"}

    def test_student_unique_per_teacher_code(self):
        """Verify a profile can be enrolled once per teacher code."""
        constraints = [
            c for c in Student.__table__.constraints if isinstance(c, UniqueConstraint)
        ]
        assert [tuple(col.name for col in c.columns) for c in constraints] == [
            ("profile_id", "teacher_code")
        ]

    def test_unassigned_sentinel(self):
        """Verify the sentinel teacher code."""
        assert UNASSIGNED_TEACHER_CODE == "UNASSIGNED"


class TestSchedulingModels:
    """Test invitation and class tables."""

    def test_invitation_tablename(self):
        """Verify StudentInvitation table name and owner."""
        assert StudentInvitation.__tablename__ == "student_invitations"
        fks = {fk.target_fullname for fk in StudentInvitation.__table__.c.teacher_id.foreign_keys}
        assert fks == {"teachers.id"}

    def test_class_tablename(self):
        """Verify ScheduledClass maps to classes."""
        assert ScheduledClass.__tablename__ == "classes"

    @pytest.mark.parametrize(
        "status,value",
        [
            (ClassStatus.SCHEDULED, "Programada"),
            (ClassStatus.PENDING, "Pendiente"),
            (ClassStatus.COMPLETED, "Completada"),
            (ClassStatus.CANCELLED, "Cancelada"),
        ],
    )
    def test_class_status_values(self, status, value):
        """Verify persisted class status strings."""
        assert status.value == value

    def test_payment_status_values(self):
        """Verify persisted payment status strings."""
        assert PaymentStatus.UNPAID.value == "No Pagado"
        assert PaymentStatus.PAID.value == "Pagado"

    def test_durations(self):
        """Verify allowed class durations."""
        assert ALLOWED_DURATIONS == (30, 45, 60, 90, 120)
        assert DEFAULT_DURATION == 60
