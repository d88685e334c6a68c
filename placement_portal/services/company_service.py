"""
Company Representative Service

Reps manage their own company's postings (matched by company name,
case-insensitive) and decide on the applications those postings receive.
"""

import logging
from datetime import date
from typing import List

from placement_portal.core.exceptions import AuthorizationError, InvalidStateError
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import CompanyRep
from placement_portal.services.base import BaseService
from placement_portal.services.id_service import INTERNSHIP_PREFIX

logger = logging.getLogger(__name__)


class CompanyRepService(BaseService):

    def get_rep(self, rep_email: str) -> CompanyRep:
        return self.reps.get_by_email(rep_email)

    def _approved_rep(self, rep_email: str) -> CompanyRep:
        rep = self.get_rep(rep_email)
        if not rep.approved:
            raise AuthorizationError("Account pending approval by Career Center staff.")
        return rep

    def _owned_internship(self, rep: CompanyRep, internship_id: str) -> Internship:
        internship = self.internships.get(internship_id)
        rep.ensure_owns(internship)
        return internship

    # ============================================================
    # POSTINGS
    # ============================================================

    def list_internships(self, rep_email: str) -> List[Internship]:
        rep = self.get_rep(rep_email)
        return self.internships.find_by_company_name(rep.company_name)

    def get_internship(self, rep_email: str, internship_id: str) -> Internship:
        return self._owned_internship(self.get_rep(rep_email), internship_id)

    def create_internship(
        self,
        rep_email: str,
        title: str,
        description: str,
        level,
        preferred_major: str,
        open_date: date,
        close_date: date,
        max_slots: int,
    ) -> Internship:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            internship = rep.create_internship(
                self.ids.next_id(INTERNSHIP_PREFIX),
                title, description, level, preferred_major,
                open_date, close_date, max_slots,
                port=self.reps,
            )
            self.internships.save(internship)

        logger.info("Rep %s created internship %s (%s)", rep.email, internship.internship_id, internship.title)
        return internship

    def edit_internship(
        self,
        rep_email: str,
        internship_id: str,
        title: str,
        description: str,
        level,
        preferred_major: str,
        open_date: date,
        close_date: date,
        max_slots: int,
    ) -> Internship:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            internship = self._owned_internship(rep, internship_id)
            rep.edit_internship(
                internship,
                title=title, description=description, level=level,
                preferred_major=preferred_major, open_date=open_date,
                close_date=close_date, max_slots=max_slots,
            )
            self.internships.save(internship)

        logger.info("Rep %s edited internship %s", rep.email, internship_id)
        return internship

    def delete_internship(self, rep_email: str, internship_id: str) -> None:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            internship = self._owned_internship(rep, internship_id)
            if not internship.can_be_deleted():
                raise InvalidStateError("Cannot delete internship that has been approved.")
            self.internships.delete_by_id(internship_id)

        logger.info("Rep %s deleted internship %s", rep.email, internship_id)

    def set_visibility(self, rep_email: str, internship_id: str, visible: bool) -> Internship:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            internship = self.internships.get(internship_id)
            rep.set_internship_visibility(internship, visible)
            self.internships.save(internship)

        logger.info("Rep %s set %s visible=%s", rep.email, internship_id, visible)
        return internship

    def close_posting(self, rep_email: str, internship_id: str) -> Internship:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            internship = self.internships.get(internship_id)
            rep.close_posting(internship)
            self.internships.save(internship)

        logger.info("Rep %s closed posting %s", rep.email, internship_id)
        return internship

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def list_applications(self, rep_email: str, internship_id: str) -> List[InternshipApplication]:
        rep = self.get_rep(rep_email)
        internship = self._owned_internship(rep, internship_id)
        apps = self.applications.find_by_internship(internship_id)
        for app in apps:
            app.attach_internship(internship)
        return apps

    def mark_application_successful(self, rep_email: str, application_id: str) -> InternshipApplication:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            app = self._attached_application(application_id)
            rep.approve_application(app)
            self.applications.save(app)

        logger.info("Rep %s marked %s SUCCESSFUL", rep.email, application_id)
        return app

    def mark_application_unsuccessful(self, rep_email: str, application_id: str) -> InternshipApplication:
        with self.db.session():
            rep = self._approved_rep(rep_email)
            app = self._attached_application(application_id)
            rep.reject_application(app)
            self.applications.save(app)

        logger.info("Rep %s marked %s UNSUCCESSFUL", rep.email, application_id)
        return app

    def _attached_application(self, application_id: str) -> InternshipApplication:
        app = self.applications.get(application_id)
        if app.internship is None:
            app.attach_internship(self.internships.find_by_id(app.internship_id))
        return app
