"""
Login - resolves a login id to an actor and role.

- an email address -> company representative (must be approved)
- otherwise a student id, then a staff id

Passwords are not modelled; identity is exchanged for a signed token
by core.auth.
"""

import logging
from enum import Enum

from placement_portal.core.exceptions import AuthorizationError, NotFoundError
from placement_portal.domain.validation import require_text
from placement_portal.services.base import BaseService

logger = logging.getLogger(__name__)


class Role(str, Enum):
    STUDENT = "STUDENT"
    COMPANY_REP = "COMPANY_REP"
    STAFF = "STAFF"


class AuthService(BaseService):

    def login(self, login_id: str) -> dict:
        key = require_text(login_id, "Login ID/email")

        if "@" in key:
            rep = self.reps.find_by_email(key)
            if rep is None:
                raise NotFoundError(f"Company representative not found with email: {key}")
            if not rep.approved:
                raise AuthorizationError("Account pending approval by Career Center staff.")
            return self._identity(Role.COMPANY_REP, rep.user_id, rep.name)

        student = self.students.find_by_id(key)
        if student is not None:
            return self._identity(Role.STUDENT, student.user_id, student.name)

        staff = self.staff.find_by_id(key)
        if staff is not None:
            return self._identity(Role.STAFF, staff.user_id, staff.name)

        raise NotFoundError("ID/Email does not exist, please check.")

    def user_exists(self, role: Role, user_id: str) -> bool:
        if role == Role.STUDENT:
            return self.students.exists_by_id(user_id)
        if role == Role.STAFF:
            return self.staff.exists_by_id(user_id)
        rep = self.reps.find_by_id(user_id)
        return rep is not None and rep.approved

    @staticmethod
    def _identity(role: Role, user_id: str, name: str) -> dict:
        logger.info("%s %s logged in", role.value, user_id)
        return {"user_id": user_id, "role": role.value, "name": name}
