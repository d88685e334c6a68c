"""
InternshipApplication - a student's application to one internship.

    PENDING -> SUCCESSFUL | UNSUCCESSFUL | WITHDRAWN
    SUCCESSFUL -> WITHDRAWN, or stays SUCCESSFUL while student_accepted toggles

"Was offered" (status SUCCESSFUL) and "holds a seat" (student_accepted)
are tracked independently: revoking an acceptance after an approved
withdrawal frees the slot but leaves the status SUCCESSFUL.
"""

from datetime import date
from typing import Optional

from placement_portal.core.exceptions import InvalidStateError, NotEligibleError, ValidationError
from placement_portal.domain.enums import ApplicationStatus
from placement_portal.domain.internship import Internship
from placement_portal.domain.ports import AppReadPort
from placement_portal.domain.users import Student, assert_internship_open
from placement_portal.domain.validation import require_enum, require_text


class InternshipApplication:
    def __init__(
        self,
        application_id: str,
        student: Student,
        internship: Internship,
        app_read_port: AppReadPort,
        applied_on: Optional[date] = None,
    ):
        if student is None:
            raise ValidationError("Student is required")
        if internship is None:
            raise ValidationError("Internship is required")

        applied_on = applied_on or date.today()

        # Creation-time checks, re-validated against the port
        assert_internship_open(internship, applied_on)
        if not student.is_eligible_for(internship.level):
            raise NotEligibleError(f"Student not eligible for level {internship.level.value}")
        if student.has_confirmed_placement(app_read_port):
            raise NotEligibleError("Student already has a confirmed placement")
        if not student.can_start_another_application(app_read_port):
            raise NotEligibleError(
                f"Application cap reached ({Student.MAX_ACTIVE_APPLICATIONS})"
            )

        self._application_id = require_text(application_id, "Application id")
        self._applied_on = applied_on
        self._student = student
        self._internship = internship
        self._internship_id = internship.internship_id
        self._status = ApplicationStatus.PENDING
        self._student_accepted = False

    @classmethod
    def restore(
        cls,
        application_id: str,
        student: Student,
        internship_id: str,
        internship: Optional[Internship],
        applied_on: date,
        status,
        student_accepted: bool,
    ) -> "InternshipApplication":
        """Rebuild a stored application; the creation-time checks are not re-run."""
        app = cls.__new__(cls)
        app._application_id = require_text(application_id, "Application id")
        app._applied_on = applied_on
        app._student = student
        app._internship = internship
        app._internship_id = require_text(internship_id, "Internship id")
        app._status = require_enum(status, ApplicationStatus, "Application status")
        app._student_accepted = bool(student_accepted)
        return app

    # ---------- Queries ----------

    @property
    def application_id(self) -> str:
        return self._application_id

    @property
    def applied_on(self) -> date:
        return self._applied_on

    @property
    def student(self) -> Student:
        return self._student

    @property
    def internship_id(self) -> str:
        return self._internship_id

    @property
    def internship(self) -> Optional[Internship]:
        return self._internship

    @property
    def status(self) -> ApplicationStatus:
        return self._status

    @property
    def student_accepted(self) -> bool:
        return self._student_accepted

    def can_accept(self) -> bool:
        return self._status == ApplicationStatus.SUCCESSFUL and not self._student_accepted

    def is_active_toward_cap(self) -> bool:
        return self._status == ApplicationStatus.PENDING or self.can_accept()

    def is_confirmed_placement(self) -> bool:
        return self._status == ApplicationStatus.SUCCESSFUL and self._student_accepted

    # ---------- Internship re-attachment ----------

    def attach_internship(self, internship: Optional[Internship]) -> None:
        """Re-attach the posting object; the durable id follows it when present."""
        self._internship = internship
        if internship is not None:
            self._internship_id = internship.internship_id

    def detach_internship(self) -> None:
        self._internship = None

    # ---------- Transitions (company decisions) ----------

    def mark_successful(self) -> None:
        self._ensure_status(ApplicationStatus.PENDING, "Only PENDING can be marked SUCCESSFUL")
        self._status = ApplicationStatus.SUCCESSFUL

    def mark_unsuccessful(self) -> None:
        if self._status == ApplicationStatus.SUCCESSFUL and self._student_accepted:
            raise InvalidStateError("Cannot reject after student accepted")
        self._ensure_status(ApplicationStatus.PENDING, "Only PENDING can be marked UNSUCCESSFUL")
        self._status = ApplicationStatus.UNSUCCESSFUL

    def mark_withdrawn(self) -> None:
        # Unconditional: used by withdrawal approval and the acceptance cascade
        self._status = ApplicationStatus.WITHDRAWN

    # ---------- Transitions (student actions) ----------

    def confirm_acceptance(self, app_read_port: AppReadPort) -> None:
        """
        Accept the offer and reserve a slot on the internship.

        All checks run before anything changes; if the slot increment
        fails the acceptance fails with it and the flag stays False.
        """
        if not self.can_accept():
            raise InvalidStateError(
                f"Cannot accept in status {self._status.value}"
                + (" (already accepted)" if self._student_accepted else "")
            )
        self._student.assert_can_confirm_offer(app_read_port)
        if self._internship is None:
            raise InvalidStateError("Internship details not attached; cannot confirm acceptance")

        self._internship.increment_confirmed_slots()
        self._student_accepted = True

    def revoke_acceptance_after_approved_withdrawal(self) -> None:
        if not self._student_accepted:
            raise InvalidStateError("No accepted placement to revoke")
        if self._internship is None:
            raise InvalidStateError("Internship details not attached; cannot revoke acceptance")

        self._internship.decrement_confirmed_slots()
        self._student_accepted = False

    # ---------- Helpers ----------

    def _ensure_status(self, expected: ApplicationStatus, message: str) -> None:
        if self._status != expected:
            raise InvalidStateError(f"{message} (current={self._status.value})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, InternshipApplication):
            return NotImplemented
        return self._application_id == other._application_id

    def __hash__(self) -> int:
        return hash(self._application_id)

    def __repr__(self) -> str:
        return (
            f"InternshipApplication({self._application_id!r}, student={self._student.user_id!r}, "
            f"internship={self._internship_id!r}, status={self._status.value}, "
            f"accepted={self._student_accepted})"
        )
