"""
Student Service

Everything a student can do:
1. Browse eligible (open, visible, level-matched) internships
2. Apply, subject to the cap/eligibility/placement rules
3. Accept an offer - reserves a slot and withdraws all other active applications
4. Ask career-center staff to withdraw an application
"""

import logging
from typing import List, Optional

from placement_portal.core.exceptions import AuthorizationError, InvalidStateError
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.enums import ApplicationStatus, InternshipLevel
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import Student, filter_internships
from placement_portal.domain.validation import require_text
from placement_portal.domain.withdrawal import WithdrawalRequest
from placement_portal.services.base import BaseService
from placement_portal.services.id_service import APPLICATION_PREFIX, WITHDRAWAL_PREFIX

logger = logging.getLogger(__name__)


class StudentService(BaseService):

    def get_student(self, student_id: str) -> Student:
        return self.students.get(student_id)

    def get_internship(self, internship_id: str) -> Internship:
        return self.internships.get(internship_id)

    # ============================================================
    # BROWSING
    # ============================================================

    def view_eligible_internships(self, student_id: str) -> List[Internship]:
        student = self.get_student(student_id)
        return student.filter_eligible_visible_open(self.internships.find_all(), self.today())

    def view_filtered_internships(
        self,
        student_id: str,
        major: Optional[str] = None,
        level: Optional[InternshipLevel] = None,
        company_name: Optional[str] = None,
    ) -> List[Internship]:
        eligible = self.view_eligible_internships(student_id)
        return filter_internships(eligible, major=major, level=level, company_name=company_name)

    # ============================================================
    # APPLYING
    # ============================================================

    def apply(self, student_id: str, internship_id: str) -> InternshipApplication:
        with self.db.session():
            student = self.get_student(student_id)
            internship = self.get_internship(internship_id)

            if self.applications.exists_by_student_and_internship(student_id, internship_id):
                raise InvalidStateError("You have already applied to this internship.")

            today = self.today()
            student.assert_can_apply(internship, self.applications, today)
            app = InternshipApplication(
                self.ids.next_id(APPLICATION_PREFIX), student, internship, self.applications, applied_on=today
            )
            self.applications.save(app)

        logger.info("Student %s applied to %s (%s)", student_id, internship_id, app.application_id)
        return app

    def confirm_acceptance(self, student_id: str, application_id: str) -> InternshipApplication:
        """
        Accept a SUCCESSFUL offer.

        Post-condition: every other PENDING/SUCCESSFUL application of the
        student is WITHDRAWN. Slot reservation and the cascade commit together.
        """
        with self.db.session():
            app = self._owned_application(student_id, application_id)
            self._reattach(app)

            if app.status != ApplicationStatus.SUCCESSFUL:
                raise InvalidStateError("Only SUCCESSFUL applications can be accepted.")
            if app.student_accepted:
                raise InvalidStateError("This offer is already accepted.")

            app.confirm_acceptance(self.applications)
            self.applications.save(app)
            if app.internship is not None:
                self.internships.save(app.internship)

            withdrawn = []
            for other in self.applications.find_by_student(student_id):
                if other.application_id == application_id:
                    continue
                if other.status in (ApplicationStatus.PENDING, ApplicationStatus.SUCCESSFUL):
                    other.mark_withdrawn()
                    self.applications.save(other)
                    withdrawn.append(other.application_id)

        logger.info(
            "Student %s accepted %s; auto-withdrew %s",
            student_id, application_id, ", ".join(withdrawn) or "nothing",
        )
        return app

    # ============================================================
    # WITHDRAWALS
    # ============================================================

    def request_withdrawal(self, student_id: str, application_id: str, reason: Optional[str]) -> WithdrawalRequest:
        with self.db.session():
            app = self._owned_application(student_id, application_id)
            reason = require_text(reason, "Withdrawal reason")

            if self.withdrawals.find_pending_for_application(application_id) is not None:
                raise InvalidStateError("There is already a pending withdrawal request for this application.")

            request = WithdrawalRequest(
                self.ids.next_id(WITHDRAWAL_PREFIX), app, app.student, reason, requested_on=self.today()
            )
            self.withdrawals.save(request)

        logger.info("Student %s requested withdrawal %s for %s", student_id, request.request_id, application_id)
        return request

    # ============================================================
    # QUERIES
    # ============================================================

    def view_my_applications(self, student_id: str) -> List[InternshipApplication]:
        apps = self.applications.find_by_student(student_id)
        for app in apps:
            self._reattach(app)
        return apps

    def view_my_withdrawal_requests(self, student_id: str) -> List[WithdrawalRequest]:
        return self.withdrawals.find_by_student(student_id)

    def get_application(self, student_id: str, application_id: str) -> InternshipApplication:
        return self._owned_application(student_id, application_id)

    def can_apply_more(self, student_id: str) -> bool:
        return self.get_student(student_id).can_start_another_application(self.applications)

    def active_application_count(self, student_id: str) -> int:
        return self.get_student(student_id).active_applications_count(self.applications)

    def has_confirmed_placement(self, student_id: str) -> bool:
        return self.get_student(student_id).has_confirmed_placement(self.applications)

    # ---------- helpers ----------

    def _owned_application(self, student_id: str, application_id: str) -> InternshipApplication:
        app = self.applications.get(application_id)
        if app.student is None or app.student.user_id != student_id:
            raise AuthorizationError("You can only manage your own applications.")
        return app

    def _reattach(self, app: InternshipApplication) -> None:
        app.attach_internship(self.internships.find_by_id(app.internship_id))
