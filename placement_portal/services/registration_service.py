"""
Company representative self-registration.

New reps start unapproved; staff decide through StaffService.
"""

import logging
import re

from placement_portal.core.exceptions import InvalidStateError, ValidationError
from placement_portal.domain.users import CompanyRep
from placement_portal.domain.validation import require_text
from placement_portal.services.base import BaseService

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


class RegistrationService(BaseService):

    def register_company_rep(
        self, name: str, company_name: str, department: str, position: str, email: str
    ) -> CompanyRep:
        name = require_text(name, "Name")
        company_name = require_text(company_name, "Company name")
        department = require_text(department, "Department")
        position = require_text(position, "Position")
        email = require_text(email, "Email").lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email format")

        with self.db.session():
            if self.reps.exists_by_id(email) or self.reps.find_by_email(email) is not None:
                raise InvalidStateError("Email already registered. Please use a different email address.")
            rep = CompanyRep(email, name, company_name, department, position, email)
            self.reps.save(rep)

        logger.info("Company rep %s registered for %s (pending approval)", email, company_name)
        return rep

    def email_exists(self, email: str) -> bool:
        return self.reps.find_by_email(email) is not None
