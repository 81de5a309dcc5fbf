# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student onboarding request and outcome models.

The outcome carries a tagged branch:

- LinkedExisting: the e-mail already had a profile, which is now enrolled
  under the teacher's code.
- CreatedInvitation: no profile existed, so a pending invitation was
  created and an e-mail was attempted.

Non-fatal sub-step failures (class booking, notification) are listed in
``warnings`` next to a successful branch.
"""

from datetime import date, time
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from edutranscribe.models.common import ClassDuration, EmailAddress, NonBlankStr


class OnboardStudentRequest(BaseModel):
    """Request to onboard a student under the acting teacher.

    Class fields are only used when schedule_class is true. If any of
    topic, class_date or class_time is missing the booking is skipped
    without failing the request.
    """

    student_name: NonBlankStr = Field(..., max_length=255)
    student_email: EmailAddress = Field(..., max_length=255)
    student_level: str | None = Field(None, max_length=100)
    schedule_class: bool = False
    topic: str | None = Field(None, max_length=255)
    class_date: date | None = None
    class_time: time | None = None
    duration: ClassDuration = 60
    meeting_link: str | None = Field(None, max_length=500)
    notes: str | None = None

    @property
    def has_complete_class_details(self) -> bool:
        """True when topic, date and time are all provided."""
        return bool(self.topic and self.topic.strip()) and (
            self.class_date is not None and self.class_time is not None
        )


class ClassBookingStatus(str, Enum):
    """Result of the optional class booking sub-step."""

    NOT_REQUESTED = "not_requested"
    SKIPPED = "skipped"
    BOOKED = "booked"
    FAILED = "failed"


class NotificationStatus(str, Enum):
    """Result of the invitation notification sub-step."""

    NOT_REQUIRED = "not_required"
    SENT = "sent"
    FAILED = "failed"


class OnboardingWarningCode(str, Enum):
    """Non-fatal failures reported alongside a successful onboarding."""

    CLASS_BOOKING_FAILED = "class_booking_failed"
    NOTIFICATION_FAILED = "notification_failed"


class OnboardingWarning(BaseModel):
    """A non-fatal sub-step failure."""

    code: OnboardingWarningCode
    message: str


class LinkedExisting(BaseModel):
    """Branch A: an existing profile was enrolled under the teacher."""

    kind: Literal["linked_existing"] = "linked_existing"
    profile_id: str
    student_id: str


class CreatedInvitation(BaseModel):
    """Branch B: a pending invitation was created for an unknown e-mail."""

    kind: Literal["created_invitation"] = "created_invitation"
    invitation_id: str


OnboardingBranch = Annotated[
    Union[LinkedExisting, CreatedInvitation],
    Field(discriminator="kind"),
]


class OnboardingOutcome(BaseModel):
    """Single result of one onboarding invocation."""

    teacher_id: str
    teacher_code: str
    branch: OnboardingBranch
    class_booking: ClassBookingStatus = ClassBookingStatus.NOT_REQUESTED
    class_id: str | None = None
    notification: NotificationStatus = NotificationStatus.NOT_REQUIRED
    warnings: list[OnboardingWarning] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """True if any sub-step failed."""
        return bool(self.warnings)
