"""
Career Center Staff Service

Staff gate the whole system:
- company rep accounts (approve / reject)
- internship postings (approve + visibility / reject)
- withdrawal requests (approve reconciles application + slot / reject)
"""

import logging
from typing import List, Optional

from placement_portal.core.exceptions import InvalidStateError
from placement_portal.domain.enums import InternshipLevel, InternshipStatus
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import CareerCenterStaff, CompanyRep
from placement_portal.domain.withdrawal import WithdrawalRequest
from placement_portal.services.base import BaseService

logger = logging.getLogger(__name__)


class StaffService(BaseService):

    def get_staff(self, staff_id: str) -> CareerCenterStaff:
        return self.staff.get(staff_id)

    # ============================================================
    # LISTINGS
    # ============================================================

    def list_pending_internships(self) -> List[Internship]:
        return self.internships.find_by_status(InternshipStatus.PENDING)

    def list_all_internships(self) -> List[Internship]:
        return self.internships.find_all()

    def list_unapproved_reps(self) -> List[CompanyRep]:
        return self.reps.find_pending()

    def list_all_reps(self) -> List[CompanyRep]:
        return self.reps.find_all()

    def list_pending_withdrawals(self) -> List[WithdrawalRequest]:
        return self.withdrawals.find_pending()

    def filter_internships(
        self,
        staff_id: str,
        status: Optional[InternshipStatus] = None,
        major: Optional[str] = None,
        level: Optional[InternshipLevel] = None,
        company_name: Optional[str] = None,
    ) -> List[Internship]:
        staff = self.get_staff(staff_id)
        return staff.filter_internships(
            self.internships.find_all(), status=status, major=major, level=level, company_name=company_name
        )

    # ============================================================
    # INTERNSHIP DECISIONS
    # ============================================================

    def approve_internship(self, staff_id: str, internship_id: str, make_visible: bool = True) -> Internship:
        with self.db.session():
            staff = self.get_staff(staff_id)
            internship = self.internships.get(internship_id)
            if internship.status != InternshipStatus.PENDING:
                raise InvalidStateError("Only pending internships can be approved.")
            staff.approve_internship(internship, make_visible)
            self.internships.save(internship)

        logger.info("Staff %s approved internship %s (visible=%s)", staff_id, internship_id, make_visible)
        return internship

    def reject_internship(self, staff_id: str, internship_id: str) -> Internship:
        with self.db.session():
            staff = self.get_staff(staff_id)
            internship = self.internships.get(internship_id)
            if internship.status != InternshipStatus.PENDING:
                raise InvalidStateError("Only pending internships can be rejected.")
            staff.reject_internship(internship)
            self.internships.save(internship)

        logger.info("Staff %s rejected internship %s", staff_id, internship_id)
        return internship

    # ============================================================
    # COMPANY REP DECISIONS
    # ============================================================

    def approve_company_rep(self, staff_id: str, rep_email: str) -> CompanyRep:
        with self.db.session():
            staff = self.get_staff(staff_id)
            rep = self.reps.get_by_email(rep_email)
            if rep.approved:
                raise InvalidStateError("Company representative is already approved.")
            staff.approve_company_rep(rep)
            self.reps.save(rep)

        logger.info("Staff %s approved company rep %s", staff_id, rep.email)
        return rep

    def reject_company_rep(self, staff_id: str, rep_email: str, reason: Optional[str] = None) -> CompanyRep:
        with self.db.session():
            staff = self.get_staff(staff_id)
            rep = self.reps.get_by_email(rep_email)
            if rep.is_rejected:
                raise InvalidStateError("Company representative is already rejected.")
            staff.reject_company_rep(rep, (reason or "").strip() or self.settings.default_rep_rejection_reason)
            self.reps.save(rep)

        logger.info("Staff %s rejected company rep %s", staff_id, rep.email)
        return rep

    # ============================================================
    # WITHDRAWAL DECISIONS
    # ============================================================

    def approve_withdrawal(self, staff_id: str, request_id: str, note: Optional[str] = None) -> WithdrawalRequest:
        """Approve and reconcile application + internship slot in one unit of work."""
        return self._process_withdrawal(staff_id, request_id, True, note or self.settings.default_withdrawal_approve_note)

    def reject_withdrawal(self, staff_id: str, request_id: str, note: Optional[str] = None) -> WithdrawalRequest:
        return self._process_withdrawal(staff_id, request_id, False, note or self.settings.default_withdrawal_reject_note)

    def _process_withdrawal(self, staff_id: str, request_id: str, approve: bool, note: str) -> WithdrawalRequest:
        with self.db.session():
            staff = self.get_staff(staff_id)
            request = self.withdrawals.get(request_id)
            if not request.is_pending():
                raise InvalidStateError("Withdrawal request is already processed.")

            app = request.application
            if app.internship is None:
                app.attach_internship(self.internships.find_by_id(app.internship_id))

            staff.process_withdrawal(request, approve, note, on=self.today())
            self.withdrawals.save(request)
            self.applications.save(app)
            if app.internship is not None:
                self.internships.save(app.internship)

        logger.info(
            "Staff %s %s withdrawal %s (application %s)",
            staff_id, "approved" if approve else "rejected", request_id, app.application_id,
        )
        return request
