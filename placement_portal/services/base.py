"""
Shared wiring for the controller-layer services: the store, one
repository per table, the id generator, the clock and the settings.
"""

from datetime import date
from typing import Callable, Optional

from placement_portal.core.config import Settings, get_settings
from placement_portal.db.database import Database
from placement_portal.db.repositories import (
    ApplicationRepository,
    CareerCenterStaffRepository,
    CompanyRepRepository,
    InternshipRepository,
    StudentRepository,
    WithdrawalRequestRepository,
)
from placement_portal.domain.ports import IdGenerator
from placement_portal.services.id_service import SequentialIdGenerator


class BaseService:
    def __init__(
        self,
        db: Database,
        id_generator: Optional[IdGenerator] = None,
        today: Optional[Callable[[], date]] = None,
        settings: Optional[Settings] = None,
    ):
        self.db = db
        self.students = StudentRepository(db)
        self.reps = CompanyRepRepository(db)
        self.staff = CareerCenterStaffRepository(db)
        self.internships = InternshipRepository(db)
        self.applications = ApplicationRepository(db)
        self.withdrawals = WithdrawalRequestRepository(db)
        self.ids = id_generator or SequentialIdGenerator(db)
        self.today = today or date.today
        self.settings = settings or get_settings()
