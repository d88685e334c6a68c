"""
Actors of the placement domain.

- Student: eligibility rules + cap/placement queries through AppReadPort
- CompanyRep: manages its own company's postings and application decisions
- CareerCenterStaff: approves reps/postings, processes withdrawal requests

Role wrappers assert ownership/authority first, then delegate to the
entity mutators. They hold no collections of their own.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Iterable, List, Optional

from placement_portal.core.exceptions import (
    AuthorizationError,
    CapacityExceededError,
    InvalidStateError,
    NotEligibleError,
    ValidationError,
)
from placement_portal.domain.enums import InternshipLevel, InternshipStatus
from placement_portal.domain.internship import Internship
from placement_portal.domain.ports import AppReadPort, RepPostingReadPort
from placement_portal.domain.validation import require_text

if TYPE_CHECKING:
    from placement_portal.domain.application import InternshipApplication
    from placement_portal.domain.withdrawal import WithdrawalRequest


class User:
    def __init__(self, user_id: str, name: str):
        self._user_id = require_text(user_id, "User id")
        self.name = require_text(name, "Name")

    @property
    def user_id(self) -> str:
        return self._user_id

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self._user_id == other._user_id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._user_id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._user_id!r}, {self.name!r})"


# ============================================================
# STUDENT
# ============================================================

class Student(User):
    MAX_ACTIVE_APPLICATIONS = 3

    def __init__(self, user_id: str, name: str, major: str, year_of_study: int, email: str):
        super().__init__(user_id, name)
        if isinstance(year_of_study, bool) or not isinstance(year_of_study, int) or not 1 <= year_of_study <= 4:
            raise ValidationError("Year of study must be between 1 and 4")
        self.major = require_text(major, "Major")
        self.year_of_study = year_of_study
        self.email = require_text(email, "Email")

    # -------------------- Queries --------------------

    def is_eligible_for(self, level: Optional[InternshipLevel]) -> bool:
        """Years 1-2 may only take BASIC; years 3-4 may take any level."""
        if level is None:
            return False
        if self.year_of_study <= 2:
            return level == InternshipLevel.BASIC
        return level in (InternshipLevel.BASIC, InternshipLevel.INTERMEDIATE, InternshipLevel.ADVANCED)

    def filter_eligible_visible_open(
        self, internships: Optional[Iterable[Internship]], as_of: Optional[date] = None
    ) -> List[Internship]:
        if internships is None:
            return []
        as_of = as_of or date.today()
        return [
            i for i in internships
            if i is not None
            and i.is_open_for_applications(as_of)
            and i.visible
            and self.is_eligible_for(i.level)
        ]

    def has_confirmed_placement(self, apps: AppReadPort) -> bool:
        return apps.has_confirmed_placement(self.user_id)

    def active_applications_count(self, apps: AppReadPort) -> int:
        return apps.count_active_applications(self.user_id)

    def can_start_another_application(self, apps: AppReadPort) -> bool:
        return self.active_applications_count(apps) < self.MAX_ACTIVE_APPLICATIONS

    # -------------------- Domain validations --------------------

    def assert_can_apply(self, internship: Internship, apps: AppReadPort, as_of: Optional[date] = None) -> None:
        """
        Raise the first rule a new application to `internship` would break:
        not open/visible, ineligible level, placement already held, cap reached.
        """
        as_of = as_of or date.today()
        assert_internship_open(internship, as_of)

        if not self.is_eligible_for(internship.level):
            raise NotEligibleError(f"Not eligible for level {internship.level.value}")

        if self.has_confirmed_placement(apps):
            raise NotEligibleError("Already have a confirmed placement")

        if not self.can_start_another_application(apps):
            raise NotEligibleError(f"Application cap reached ({self.MAX_ACTIVE_APPLICATIONS})")

    def assert_can_confirm_offer(self, apps: AppReadPort) -> None:
        if self.has_confirmed_placement(apps):
            raise NotEligibleError("Cannot confirm: placement already confirmed")


def assert_internship_open(internship: Internship, as_of: date) -> None:
    """A full posting is a capacity problem; anything else is a state problem."""
    if internship.is_open_for_applications(as_of) and internship.visible:
        return
    if internship.status in (InternshipStatus.APPROVED, InternshipStatus.FILLED) and internship.is_full:
        raise CapacityExceededError("Internship has no remaining slots")
    raise InvalidStateError("Internship is not open/visible for applications")


# ============================================================
# COMPANY REPRESENTATIVE
# ============================================================

class CompanyRep(User):
    MAX_POSTINGS = 5

    def __init__(self, user_id: str, name: str, company_name: str, department: str, position: str, email: str):
        super().__init__(user_id, name)
        self.company_name = require_text(company_name, "Company name")
        self.department = require_text(department, "Department")
        self.position = require_text(position, "Position")
        self.email = require_text(email, "Email")
        self.approved = False
        self.rejection_reason = ""

    # ---------- Registration status ----------

    @property
    def is_rejected(self) -> bool:
        return not self.approved and bool(self.rejection_reason)

    @property
    def is_pending(self) -> bool:
        return not self.approved and not self.rejection_reason

    def approve(self) -> None:
        self.approved = True
        self.rejection_reason = ""

    def reject(self, reason: Optional[str]) -> None:
        self.approved = False
        self.rejection_reason = (reason or "").strip()

    # ---------- Posting management ----------

    def can_create_another_posting(self, port: RepPostingReadPort) -> bool:
        return port.count_active_postings_for_rep(self.user_id) < self.MAX_POSTINGS

    def create_internship(
        self,
        internship_id: str,
        title: str,
        description: str,
        level,
        preferred_major: str,
        open_date: date,
        close_date: date,
        max_slots: int,
        port: RepPostingReadPort,
    ) -> Internship:
        if not self.approved:
            raise AuthorizationError("Company representative is not approved")
        if not self.can_create_another_posting(port):
            raise InvalidStateError(
                f"You have reached the limit of {self.MAX_POSTINGS} active internship postings."
            )
        return Internship(
            internship_id, title, description, level, preferred_major,
            open_date, close_date, self.company_name, max_slots,
        )

    def edit_internship(self, internship: Internship, **details) -> None:
        self.ensure_owns(internship)
        internship.update_details(**details)

    def set_internship_visibility(self, internship: Internship, visible: bool) -> None:
        self.ensure_owns(internship)
        internship.set_visible(visible)

    def close_posting(self, internship: Internship) -> None:
        self.ensure_owns(internship)
        if internship.status in (InternshipStatus.APPROVED, InternshipStatus.FILLED):
            internship.set_visible(False)

    # ---------- Application decisions (own postings only) ----------

    def approve_application(self, app: "InternshipApplication") -> None:
        self.ensure_owns(app.internship)
        app.mark_successful()

    def reject_application(self, app: "InternshipApplication") -> None:
        self.ensure_owns(app.internship)
        app.mark_unsuccessful()

    def owns(self, internship: Internship) -> bool:
        return self.company_name.casefold() == internship.company_name.casefold()

    def ensure_owns(self, internship: Optional[Internship]) -> None:
        if internship is None:
            raise InvalidStateError("Internship details not attached")
        if not self.owns(internship):
            raise AuthorizationError("Cannot manage another company's posting")


# ============================================================
# CAREER CENTER STAFF
# ============================================================

class CareerCenterStaff(User):
    def __init__(self, user_id: str, name: str, role: str, department: str, email: str):
        super().__init__(user_id, name)
        self.role = require_text(role, "Role")
        self.department = require_text(department, "Department")
        self.email = require_text(email, "Email")

    def approve_company_rep(self, rep: CompanyRep) -> None:
        rep.approve()

    def reject_company_rep(self, rep: CompanyRep, reason: Optional[str]) -> None:
        rep.reject(reason)

    def approve_internship(self, internship: Internship, make_visible: bool = True) -> None:
        internship.approve()
        internship.set_visible(make_visible)

    def reject_internship(self, internship: Internship) -> None:
        internship.reject()

    def process_withdrawal(
        self, request: "WithdrawalRequest", approve: bool, note: Optional[str] = None, on: Optional[date] = None
    ) -> None:
        if approve:
            request.approve(self, note, on)
        else:
            request.reject(self, note, on)

    def filter_internships(
        self,
        internships: Optional[Iterable[Internship]],
        status: Optional[InternshipStatus] = None,
        major: Optional[str] = None,
        level: Optional[InternshipLevel] = None,
        company_name: Optional[str] = None,
    ) -> List[Internship]:
        return filter_internships(internships, status=status, major=major, level=level, company_name=company_name)


def filter_internships(
    internships: Optional[Iterable[Internship]],
    status: Optional[InternshipStatus] = None,
    major: Optional[str] = None,
    level: Optional[InternshipLevel] = None,
    company_name: Optional[str] = None,
) -> List[Internship]:
    """Case-insensitive attribute filter; None/empty criteria match everything."""
    if internships is None:
        return []
    return [
        i for i in internships
        if (status is None or i.status == status)
        and (not major or i.preferred_major.casefold() == major.casefold())
        and (level is None or i.level == level)
        and (not company_name or i.company_name.casefold() == company_name.casefold())
    ]
