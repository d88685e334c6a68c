"""
Domain module - entities and the rules that govern their state transitions.

Nothing in here knows about storage, HTTP or logging; aggregate state an
entity does not own is reached through the read ports in domain.ports.
"""
from placement_portal.domain.enums import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    WithdrawalRequestStatus,
)
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import CareerCenterStaff, CompanyRep, Student, User
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.withdrawal import WithdrawalRequest
from placement_portal.domain.ports import AppReadPort, IdGenerator, RepPostingReadPort

__all__ = [
    "ApplicationStatus",
    "InternshipLevel",
    "InternshipStatus",
    "WithdrawalRequestStatus",
    "Internship",
    "User",
    "Student",
    "CompanyRep",
    "CareerCenterStaff",
    "InternshipApplication",
    "WithdrawalRequest",
    "AppReadPort",
    "RepPostingReadPort",
    "IdGenerator",
]
