"""
WithdrawalRequest - a student's request to pull out of an application,
decided once by career-center staff.

    PENDING -> APPROVED | REJECTED

Approval reconciles the linked application (and through it the
internship's slot count):
- accepted placement -> acceptance revoked, slot freed, status stays SUCCESSFUL
- PENDING or unaccepted SUCCESSFUL -> application WITHDRAWN
"""

from datetime import date
from typing import Optional

from placement_portal.core.exceptions import AuthorizationError, InvalidStateError, ValidationError
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.enums import ApplicationStatus, WithdrawalRequestStatus
from placement_portal.domain.users import CareerCenterStaff, Student
from placement_portal.domain.validation import require_enum, require_text, sanitize_note


class WithdrawalRequest:
    def __init__(
        self,
        request_id: str,
        application: InternshipApplication,
        requested_by: Student,
        reason: Optional[str],
        requested_on: Optional[date] = None,
    ):
        if application is None:
            raise ValidationError("Application is required")
        if requested_by is None:
            raise ValidationError("Requesting student is required")
        if application.student is None or application.student != requested_by:
            raise AuthorizationError("Requester must be the owner of the application")

        self._request_id = require_text(request_id, "Request id")
        self._application = application
        self._requested_by = requested_by
        self._requested_on = requested_on or date.today()
        self._reason = sanitize_note(reason)
        self._status = WithdrawalRequestStatus.PENDING

        # Audit, stamped when processed
        self._processed_by: Optional[CareerCenterStaff] = None
        self._processed_on: Optional[date] = None
        self._staff_note: Optional[str] = None

    @classmethod
    def restore(
        cls,
        request_id: str,
        application: InternshipApplication,
        requested_on: date,
        reason: str,
        status,
        processed_by: Optional[CareerCenterStaff] = None,
        processed_on: Optional[date] = None,
        staff_note: Optional[str] = None,
    ) -> "WithdrawalRequest":
        request = cls(request_id, application, application.student, reason, requested_on)
        request._status = require_enum(status, WithdrawalRequestStatus, "Withdrawal status")
        request._processed_by = processed_by
        request._processed_on = processed_on
        request._staff_note = staff_note
        return request

    # ---------- Queries ----------

    @property
    def request_id(self) -> str:
        return self._request_id

    @property
    def application(self) -> InternshipApplication:
        return self._application

    @property
    def requested_by(self) -> Student:
        return self._requested_by

    @property
    def requested_on(self) -> date:
        return self._requested_on

    @property
    def reason(self) -> str:
        return self._reason

    @property
    def status(self) -> WithdrawalRequestStatus:
        return self._status

    @property
    def processed_by(self) -> Optional[CareerCenterStaff]:
        return self._processed_by

    @property
    def processed_on(self) -> Optional[date]:
        return self._processed_on

    @property
    def staff_note(self) -> Optional[str]:
        return self._staff_note

    def is_pending(self) -> bool:
        return self._status == WithdrawalRequestStatus.PENDING

    # ---------- Commands ----------

    def update_reason(self, reason: Optional[str]) -> None:
        self._ensure_pending()
        self._reason = sanitize_note(reason)

    def approve(self, staff: CareerCenterStaff, note: Optional[str] = None, on: Optional[date] = None) -> None:
        note, on = self._check_decision(staff, note, on)

        app = self._application
        if app.student_accepted:
            # Checked up front so a detached internship fails before any mutation
            if app.internship is None:
                raise InvalidStateError("Internship details not attached; cannot revoke acceptance")
            app.revoke_acceptance_after_approved_withdrawal()
        elif app.status in (ApplicationStatus.PENDING, ApplicationStatus.SUCCESSFUL):
            app.mark_withdrawn()

        self._status = WithdrawalRequestStatus.APPROVED
        self._stamp(staff, note, on)

    def reject(self, staff: CareerCenterStaff, note: Optional[str] = None, on: Optional[date] = None) -> None:
        note, on = self._check_decision(staff, note, on)
        self._status = WithdrawalRequestStatus.REJECTED
        self._stamp(staff, note, on)

    # ---------- Helpers ----------

    def _ensure_pending(self) -> None:
        if not self.is_pending():
            raise InvalidStateError(f"Request already processed: {self._status.value}")

    def _check_decision(self, staff: CareerCenterStaff, note: Optional[str], on: Optional[date]):
        """Validate every decision input before the application is touched."""
        if staff is None:
            raise ValidationError("Staff member is required")
        self._ensure_pending()
        note = sanitize_note(note)
        on = on or date.today()
        if not isinstance(on, date):
            raise ValidationError("Processing date must be a date")
        return note, on

    def _stamp(self, staff: CareerCenterStaff, note: str, on: date) -> None:
        self._processed_by = staff
        self._processed_on = on
        self._staff_note = note

    def __repr__(self) -> str:
        return (
            f"WithdrawalRequest({self._request_id!r}, app={self._application.application_id!r}, "
            f"by={self._requested_by.user_id!r}, status={self._status.value})"
        )
