"""
Models module - SQLAlchemy table models.

Difference from domain:
- Models: one row per entity, plain column values
- Domain: entities with behaviour; repositories convert between the two
"""
from placement_portal.models.tables import (
    ApplicationModel,
    Base,
    CareerCenterStaffModel,
    CompanyRepModel,
    InternshipModel,
    StudentModel,
    WithdrawalRequestModel,
)

__all__ = [
    "Base",
    "StudentModel",
    "CompanyRepModel",
    "CareerCenterStaffModel",
    "InternshipModel",
    "ApplicationModel",
    "WithdrawalRequestModel",
]
