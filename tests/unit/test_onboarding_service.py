# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the student onboarding service."""

from datetime import time
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from edutranscribe.domains.onboarding import (
    DuplicateEnrollmentError,
    OnboardingService,
    TeacherNotFoundError,
)
from edutranscribe.infrastructure.database import (
    ConflictUniqueConstraintError,
    RecordStore,
    TransientStoreError,
)
from edutranscribe.infrastructure.database.models import (
    Profile,
    ScheduledClass,
    Student,
    StudentInvitation,
)
from edutranscribe.infrastructure.notifications import InvitationNotifier
from edutranscribe.models.onboarding import (
    ClassBookingStatus,
    CreatedInvitation,
    LinkedExisting,
    NotificationStatus,
    OnboardingWarningCode,
    OnboardStudentRequest,
)
from tests.factories import (
    FIXED_TODAY,
    TOMORROW,
    YESTERDAY,
    RecordingChannel,
    count_rows,
    seed_enrollment,
    seed_student_profile,
    seed_teacher,
)


def _service(db_session, notifier) -> OnboardingService:
    return OnboardingService(db=db_session, notifier=notifier, today_provider=lambda: FIXED_TODAY)


def _ana_request(**overrides) -> OnboardStudentRequest:
    data = {
        "student_name": "Ana Ruiz",
        "student_email": "ana@example.com",
        "student_level": "5to Grado",
        "schedule_class": True,
        "topic": "Fracciones",
        "class_date": TOMORROW,
        "class_time": time(10, 0),
        "duration": 60,
    }
    data.update(overrides)
    return OnboardStudentRequest(**data)


async def _row_counts(db_session) -> dict[str, int]:
    return {
        "profiles": await count_rows(db_session, Profile),
        "students": await count_rows(db_session, Student),
        "invitations": await count_rows(db_session, StudentInvitation),
        "classes": await count_rows(db_session, ScheduledClass),
    }


class TestTeacherResolution:
    """Tests for resolving the acting teacher."""

    @pytest.mark.asyncio
    async def test_unknown_teacher_fails_without_writes(self, db_session, notifier, channel):
        """Test that an unknown principal raises TeacherNotFoundError."""
        service = _service(db_session, notifier)

        with pytest.raises(TeacherNotFoundError):
            await service.onboard_student("nobody", _ana_request())

        assert await _row_counts(db_session) == {
            "profiles": 0,
            "students": 0,
            "invitations": 0,
            "classes": 0,
        }
        assert channel.sent == []


class TestCreatedInvitationBranch:
    """Tests for e-mails without a profile."""

    @pytest.mark.asyncio
    async def test_ana_ruiz_scenario(self, db_session, notifier, channel):
        """Test invitation, pending class and e-mail for a new student."""
        await seed_teacher(db_session, teacher_id="teacher-t", teacher_code="PROFAB12CD")
        service = _service(db_session, notifier)

        outcome = await service.onboard_student("teacher-t", _ana_request())

        assert isinstance(outcome.branch, CreatedInvitation)
        assert outcome.teacher_code == "PROFAB12CD"
        assert outcome.class_booking == ClassBookingStatus.BOOKED
        assert outcome.notification == NotificationStatus.SENT
        assert outcome.warnings == []

        invitations = (await db_session.execute(select(StudentInvitation))).scalars().all()
        assert len(invitations) == 1
        assert invitations[0].teacher_id == "teacher-t"
        assert invitations[0].student_email == "ana@example.com"
        assert invitations[0].student_level == "5to Grado"
        assert invitations[0].is_accepted is False
        assert invitations[0].id == outcome.branch.invitation_id

        classes = (await db_session.execute(select(ScheduledClass))).scalars().all()
        assert len(classes) == 1
        assert classes[0].id == outcome.class_id
        assert classes[0].status == "Pendiente"
        assert classes[0].payment_status == "No Pagado"
        assert classes[0].student_email == "ana@example.com"
        assert classes[0].duration == 60

        assert len(channel.sent) == 1
        payload = channel.sent[0]
        assert payload.recipient_email == "ana@example.com"
        assert payload.title == "Invitación para unirte a la clase de María López"
        assert payload.action_url == (
            f"https://app.edutranscribe.test/auth?invitation={outcome.branch.invitation_id}"
        )

    @pytest.mark.asyncio
    async def test_creates_no_profile_or_student(self, db_session, notifier):
        """Test that branch B writes only the invitation."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)

        await service.onboard_student("teacher-1", _ana_request(schedule_class=False))

        counts = await _row_counts(db_session)
        assert counts["invitations"] == 1
        assert counts["students"] == 0
        # Only the seeded teacher profile
        assert counts["profiles"] == 1
        assert counts["classes"] == 0

    @pytest.mark.asyncio
    async def test_notification_failure_is_a_warning(self, db_session):
        """Test that a failed e-mail keeps the invitation and reports a warning."""
        await seed_teacher(db_session)
        notifier = InvitationNotifier(RecordingChannel(fail_with="SMTP down"), "https://app.test")
        service = _service(db_session, notifier)

        outcome = await service.onboard_student("teacher-1", _ana_request(schedule_class=False))

        assert isinstance(outcome.branch, CreatedInvitation)
        assert outcome.notification == NotificationStatus.FAILED
        assert [w.code for w in outcome.warnings] == [OnboardingWarningCode.NOTIFICATION_FAILED]
        assert outcome.warnings[0].message == "SMTP down"
        assert await count_rows(db_session, StudentInvitation) == 1

    @pytest.mark.asyncio
    async def test_channel_exception_is_a_warning(self, db_session):
        """Test that a raising channel is reported, not propagated."""
        await seed_teacher(db_session)
        notifier = InvitationNotifier(
            RecordingChannel(raise_error=ConnectionError("refused")), "https://app.test"
        )
        service = _service(db_session, notifier)

        outcome = await service.onboard_student("teacher-1", _ana_request())

        assert outcome.notification == NotificationStatus.FAILED
        assert outcome.class_booking == ClassBookingStatus.BOOKED
        assert outcome.has_warnings

    @pytest.mark.asyncio
    async def test_email_matching_is_case_sensitive(self, db_session, notifier):
        """Test that a differently cased e-mail does not match a profile."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session, email="ana@example.com")
        service = _service(db_session, notifier)

        outcome = await service.onboard_student(
            "teacher-1", _ana_request(student_email="Ana@Example.com", schedule_class=False)
        )

        assert isinstance(outcome.branch, CreatedInvitation)
        invitation = (await db_session.execute(select(StudentInvitation))).scalar_one()
        assert invitation.student_email == "Ana@Example.com"


class TestLinkedExistingBranch:
    """Tests for e-mails that already have a profile."""

    @pytest.mark.asyncio
    async def test_links_existing_profile(self, db_session, notifier, channel):
        """Test that an existing profile gets a registered Student row."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session, profile_id="student-1", email="luis@example.com")
        service = _service(db_session, notifier)

        outcome = await service.onboard_student(
            "teacher-1",
            _ana_request(student_name="Luis Pérez", student_email="luis@example.com"),
        )

        assert isinstance(outcome.branch, LinkedExisting)
        assert outcome.branch.profile_id == "student-1"
        assert outcome.notification == NotificationStatus.NOT_REQUIRED
        assert channel.sent == []

        student = (await db_session.execute(select(Student))).scalar_one()
        assert student.id == outcome.branch.student_id
        assert student.profile_id == "student-1"
        assert student.teacher_code == "PROFAB12CD"
        assert student.is_registered is True
        assert student.grade == "5to Grado"

        scheduled = (await db_session.execute(select(ScheduledClass))).scalar_one()
        assert scheduled.status == "Programada"
        assert scheduled.payment_status == "No Pagado"
        assert await count_rows(db_session, StudentInvitation) == 0

    @pytest.mark.asyncio
    async def test_profile_enrolled_with_other_teacher_is_linked(self, db_session, notifier):
        """Test that an enrollment under another code does not block linking."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session)
        await seed_enrollment(db_session, "student-1", "PROFZZ9999")
        service = _service(db_session, notifier)

        outcome = await service.onboard_student(
            "teacher-1", _ana_request(student_email="luis@example.com", schedule_class=False)
        )

        assert isinstance(outcome.branch, LinkedExisting)
        assert await count_rows(db_session, Student) == 2

    @pytest.mark.asyncio
    async def test_duplicate_enrollment_writes_nothing(self, db_session, notifier, channel):
        """Test that an existing link is rejected with zero new rows."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session)
        await seed_enrollment(db_session, "student-1", "PROFAB12CD")
        before = await _row_counts(db_session)
        service = _service(db_session, notifier)

        with pytest.raises(DuplicateEnrollmentError):
            await service.onboard_student(
                "teacher-1", _ana_request(student_email="luis@example.com")
            )

        assert await _row_counts(db_session) == before
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_second_onboarding_is_rejected(self, db_session, notifier):
        """Test that repeating a successful link fails the second time."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session)
        service = _service(db_session, notifier)
        request = _ana_request(student_email="luis@example.com")

        await service.onboard_student("teacher-1", request)
        after_first = await _row_counts(db_session)

        with pytest.raises(DuplicateEnrollmentError):
            await service.onboard_student("teacher-1", request)

        assert await _row_counts(db_session) == after_first

    @pytest.mark.asyncio
    async def test_store_conflict_maps_to_duplicate(self, db_session, notifier):
        """Test that a uniqueness conflict on insert becomes DuplicateEnrollmentError."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session)
        service = _service(db_session, notifier)

        with patch.object(
            RecordStore,
            "insert",
            AsyncMock(side_effect=ConflictUniqueConstraintError("duplicate key")),
        ):
            with pytest.raises(DuplicateEnrollmentError):
                await service.onboard_student(
                    "teacher-1", _ana_request(student_email="luis@example.com")
                )


class TestClassBooking:
    """Tests for the optional class booking sub-step."""

    @pytest.mark.asyncio
    async def test_past_date_keeps_invitation(self, db_session, notifier, channel):
        """Test that yesterday's date fails the booking but not the onboarding."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)

        outcome = await service.onboard_student("teacher-1", _ana_request(class_date=YESTERDAY))

        assert isinstance(outcome.branch, CreatedInvitation)
        assert outcome.class_booking == ClassBookingStatus.FAILED
        assert outcome.class_id is None
        assert [w.code for w in outcome.warnings] == [OnboardingWarningCode.CLASS_BOOKING_FAILED]
        assert await count_rows(db_session, StudentInvitation) == 1
        assert await count_rows(db_session, ScheduledClass) == 0
        assert outcome.notification == NotificationStatus.SENT

    @pytest.mark.asyncio
    async def test_past_date_keeps_student_link(self, db_session, notifier):
        """Test that a failed booking does not undo the Student row."""
        await seed_teacher(db_session)
        await seed_student_profile(db_session)
        service = _service(db_session, notifier)

        outcome = await service.onboard_student(
            "teacher-1",
            _ana_request(student_email="luis@example.com", class_date=YESTERDAY),
        )

        assert isinstance(outcome.branch, LinkedExisting)
        assert outcome.class_booking == ClassBookingStatus.FAILED
        assert await count_rows(db_session, Student) == 1

    @pytest.mark.asyncio
    async def test_today_is_bookable(self, db_session, notifier):
        """Test that a class today is not treated as past."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)

        outcome = await service.onboard_student("teacher-1", _ana_request(class_date=FIXED_TODAY))

        assert outcome.class_booking == ClassBookingStatus.BOOKED

    @pytest.mark.asyncio
    async def test_incomplete_class_details_are_skipped(self, db_session, notifier):
        """Test that missing topic skips the booking silently."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)

        outcome = await service.onboard_student("teacher-1", _ana_request(topic=None))

        assert outcome.class_booking == ClassBookingStatus.SKIPPED
        assert outcome.warnings == []
        assert await count_rows(db_session, ScheduledClass) == 0

    @pytest.mark.asyncio
    async def test_not_requested(self, db_session, notifier):
        """Test that schedule_class=False leaves the booking untouched."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)

        outcome = await service.onboard_student(
            "teacher-1", _ana_request(schedule_class=False, topic=None)
        )

        assert outcome.class_booking == ClassBookingStatus.NOT_REQUESTED
        assert outcome.class_id is None

    @pytest.mark.asyncio
    async def test_store_failure_on_class_is_a_warning(self, db_session, notifier):
        """Test that a store error while booking becomes a warning."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)
        original_insert = RecordStore.insert

        async def insert_failing_classes(store, record):
            if isinstance(record, ScheduledClass):
                raise TransientStoreError("connection reset")
            return await original_insert(store, record)

        with patch.object(RecordStore, "insert", insert_failing_classes):
            outcome = await service.onboard_student("teacher-1", _ana_request())

        assert outcome.class_booking == ClassBookingStatus.FAILED
        assert outcome.warnings[0].code == OnboardingWarningCode.CLASS_BOOKING_FAILED
        assert await count_rows(db_session, StudentInvitation) == 1


class TestStoreFailures:
    """Tests for fatal store failures."""

    @pytest.mark.asyncio
    async def test_transient_error_before_write_propagates(self, db_session, notifier):
        """Test that a lookup failure surfaces as TransientStoreError."""
        await seed_teacher(db_session)
        service = _service(db_session, notifier)

        with patch.object(
            RecordStore,
            "find_by_unique_key",
            AsyncMock(side_effect=TransientStoreError("timeout")),
        ):
            with pytest.raises(TransientStoreError):
                await service.onboard_student("teacher-1", _ana_request())

        assert await count_rows(db_session, StudentInvitation) == 0
