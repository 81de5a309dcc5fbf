# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Scheduled class sessions."""

from datetime import date, time
from enum import Enum

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from edutranscribe.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class ClassStatus(str, Enum):
    """Lifecycle status of a scheduled class."""

    SCHEDULED = "Programada"
    PENDING = "Pendiente"
    COMPLETED = "Completada"
    CANCELLED = "Cancelada"


class PaymentStatus(str, Enum):
    """Payment status of a scheduled class."""

    UNPAID = "No Pagado"
    PAID = "Pagado"


ALLOWED_DURATIONS = (30, 45, 60, 90, 120)
DEFAULT_DURATION = 60


class ScheduledClass(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A class session booked by a teacher for one student."""

    __tablename__ = "classes"
    __table_args__ = (
        CheckConstraint(
            "status IN ('Programada', 'Pendiente', 'Completada', 'Cancelada')",
            name="valid_class_status",
        ),
        CheckConstraint(
            "payment_status IN ('No Pagado', 'Pagado')",
            name="valid_class_payment_status",
        ),
        CheckConstraint(
            "duration IN (30, 45, 60, 90, 120)",
            name="valid_class_duration",
        ),
    )

    teacher_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    student_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    student_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    class_date: Mapped[date] = mapped_column(Date, nullable=False)
    class_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, default=DEFAULT_DURATION, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=ClassStatus.SCHEDULED.value, nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(20),
        default=PaymentStatus.UNPAID.value,
        nullable=False,
    )
    meeting_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
