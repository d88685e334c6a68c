"""
Internship - a posting created by a company representative.

Slot accounting and visibility are coupled to the status:
- visible is only ever True while status is APPROVED; filling the last
  slot hides the posting, and a vacancy re-lists it if it was visible
- status is FILLED exactly when confirmed_slots == max_slots
Peers (applications, withdrawal requests) never touch the counters
directly; they go through increment/decrement below.
"""

from datetime import date

from placement_portal.core.exceptions import (
    CapacityExceededError,
    InvalidStateError,
    ValidationError,
)
from placement_portal.domain.enums import InternshipLevel, InternshipStatus
from placement_portal.domain.validation import require_enum, require_text


class Internship:
    MAX_SLOTS = 10

    def __init__(
        self,
        internship_id: str,
        title: str,
        description: str,
        level,
        preferred_major: str,
        open_date: date,
        close_date: date,
        company_name: str,
        max_slots: int,
    ):
        self._internship_id = require_text(internship_id, "Internship id")
        self.company_name = require_text(company_name, "Company name")
        self._apply_details(title, description, level, preferred_major, open_date, close_date, max_slots)
        self._confirmed_slots = 0
        self._visible = False
        self._status = InternshipStatus.PENDING
        self._relist_on_vacancy = False

    @classmethod
    def restore(
        cls,
        internship_id: str,
        title: str,
        description: str,
        level,
        preferred_major: str,
        open_date: date,
        close_date: date,
        company_name: str,
        max_slots: int,
        confirmed_slots: int,
        status,
        visible: bool,
        relist_on_vacancy: bool = False,
    ) -> "Internship":
        """Rebuild a stored posting with its counters and flags."""
        internship = cls(
            internship_id, title, description, level, preferred_major,
            open_date, close_date, company_name, max_slots,
        )
        internship._confirmed_slots = confirmed_slots
        internship._status = require_enum(status, InternshipStatus, "Internship status")
        internship._visible = bool(visible)
        internship._relist_on_vacancy = bool(relist_on_vacancy)
        return internship

    # ---------- Accessors ----------

    @property
    def internship_id(self) -> str:
        return self._internship_id

    @property
    def confirmed_slots(self) -> int:
        return self._confirmed_slots

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def status(self) -> InternshipStatus:
        return self._status

    @property
    def relist_on_vacancy(self) -> bool:
        return self._relist_on_vacancy

    @property
    def remaining_slots(self) -> int:
        return self.max_slots - self._confirmed_slots

    @property
    def is_full(self) -> bool:
        return self._confirmed_slots >= self.max_slots

    # ---------- Status management ----------

    def approve(self) -> None:
        """PENDING -> APPROVED. A second call on an approved posting is a no-op."""
        if self._status == InternshipStatus.APPROVED:
            return
        if self._status != InternshipStatus.PENDING:
            raise InvalidStateError(
                f"Only pending internships can be approved (current={self._status.value})"
            )
        self._status = InternshipStatus.APPROVED

    def reject(self) -> None:
        """PENDING -> REJECTED, hiding the posting. No-op if already rejected."""
        if self._status == InternshipStatus.REJECTED:
            return
        if self._status != InternshipStatus.PENDING:
            raise InvalidStateError(
                f"Only pending internships can be rejected (current={self._status.value})"
            )
        self._status = InternshipStatus.REJECTED
        self._visible = False

    def set_visible(self, visible: bool) -> None:
        if visible and self._status != InternshipStatus.APPROVED:
            raise InvalidStateError("Only approved internships can be made visible.")
        if self._status == InternshipStatus.FILLED:
            # Closed while full: stays hidden when a slot frees up
            self._relist_on_vacancy = False
        self._visible = bool(visible)

    # ---------- Application window ----------

    def is_open_for_applications(self, as_of: date) -> bool:
        if self._status != InternshipStatus.APPROVED or not self._visible:
            return False
        return self.open_date <= as_of <= self.close_date and self._confirmed_slots < self.max_slots

    # ---------- Slot ledger ----------

    def increment_confirmed_slots(self) -> int:
        """
        Reserve one slot for an accepted student.

        Raises CapacityExceededError when already full; the status is
        forced to FILLED (and the posting hidden) in that case too.
        """
        if self._confirmed_slots >= self.max_slots:
            self._mark_filled()
            raise CapacityExceededError("No remaining slots.")
        self._confirmed_slots += 1
        if self._confirmed_slots >= self.max_slots:
            self._mark_filled()
        return self._confirmed_slots

    def decrement_confirmed_slots(self) -> int:
        """
        Release one slot (floored at 0). A FILLED posting reverts to
        APPROVED and is visible again if it was visible when it filled.
        """
        if self._confirmed_slots > 0:
            self._confirmed_slots -= 1
        if self._status == InternshipStatus.FILLED and self._confirmed_slots < self.max_slots:
            self._status = InternshipStatus.APPROVED
            self._visible = self._relist_on_vacancy
            self._relist_on_vacancy = False
        return self._confirmed_slots

    def _mark_filled(self) -> None:
        if self._status != InternshipStatus.FILLED:
            self._relist_on_vacancy = self._visible
        self._status = InternshipStatus.FILLED
        self._visible = False

    # ---------- Editing ----------

    def is_editable(self) -> bool:
        return self._status == InternshipStatus.PENDING

    def can_be_deleted(self) -> bool:
        return self._status in (InternshipStatus.PENDING, InternshipStatus.REJECTED)

    def update_details(
        self,
        title: str,
        description: str,
        level,
        preferred_major: str,
        open_date: date,
        close_date: date,
        max_slots: int,
    ) -> None:
        if not self.is_editable():
            raise InvalidStateError("Cannot edit internship that has been approved or rejected.")
        self._apply_details(title, description, level, preferred_major, open_date, close_date, max_slots)

    def _apply_details(self, title, description, level, preferred_major, open_date, close_date, max_slots):
        title = require_text(title, "Title")
        description = require_text(description, "Description")
        level = require_enum(level, InternshipLevel, "Internship level")
        preferred_major = require_text(preferred_major, "Preferred major")
        if open_date is None:
            raise ValidationError("Open date is required")
        if close_date is None:
            raise ValidationError("Close date is required")
        if close_date < open_date:
            raise ValidationError("Close date cannot be before open date")
        if isinstance(max_slots, bool) or not isinstance(max_slots, int) or not 1 <= max_slots <= self.MAX_SLOTS:
            raise ValidationError(f"Max slots must be between 1 and {self.MAX_SLOTS}")

        self.title = title
        self.description = description
        self.level = level
        self.preferred_major = preferred_major
        self.open_date = open_date
        self.close_date = close_date
        self.max_slots = max_slots

    def __repr__(self) -> str:
        return (
            f"Internship({self._internship_id!r}, {self.title!r}, company={self.company_name!r}, "
            f"status={self._status.value}, visible={self._visible}, "
            f"slots={self._confirmed_slots}/{self.max_slots})"
        )
