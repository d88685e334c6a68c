"""
Services module - the controller layer.

Each service validates actor/ownership preconditions, delegates to the
domain entities, and commits through a Database unit of work.
"""
from placement_portal.services.auth_service import AuthService, Role
from placement_portal.services.company_service import CompanyRepService
from placement_portal.services.id_service import SequentialIdGenerator
from placement_portal.services.registration_service import RegistrationService
from placement_portal.services.staff_service import StaffService
from placement_portal.services.student_service import StudentService

__all__ = [
    "AuthService",
    "Role",
    "CompanyRepService",
    "SequentialIdGenerator",
    "RegistrationService",
    "StaffService",
    "StudentService",
]
