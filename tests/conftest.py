"""
Shared fixtures: a fixed clock, entity factories, a stub read port, a
fresh store with demo users, and an API client bound to that store.
"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from placement_portal.core.config import Settings
from placement_portal.db.database import Database
from placement_portal.db.seed import seed_demo_data
from placement_portal.domain.enums import InternshipLevel
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import CareerCenterStaff, CompanyRep, Student
from placement_portal.main import create_app
from placement_portal.services import (
    CompanyRepService,
    RegistrationService,
    SequentialIdGenerator,
    StaffService,
    StudentService,
)

TODAY = date(2025, 3, 3)


class StubAppReadPort:
    """AppReadPort with fixed answers, so rules can be tested without a store."""

    def __init__(self, active: int = 0, placement: bool = False):
        self.active = active
        self.placement = placement

    def count_active_applications(self, student_id: str) -> int:
        return self.active

    def has_confirmed_placement(self, student_id: str) -> bool:
        return self.placement


class StubPostingPort:
    def __init__(self, active: int = 0):
        self.active = active

    def count_active_postings_for_rep(self, rep_id: str) -> int:
        return self.active


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def port():
    return StubAppReadPort()


@pytest.fixture
def posting_port():
    return StubPostingPort()


@pytest.fixture
def make_internship():
    counter = {"n": 0}

    def _make(
        level=InternshipLevel.BASIC,
        max_slots=1,
        company_name="TechCorp",
        approved=True,
        visible=True,
        open_date=TODAY - timedelta(days=10),
        close_date=TODAY + timedelta(days=30),
        internship_id=None,
    ) -> Internship:
        counter["n"] += 1
        internship = Internship(
            internship_id or f"INT{counter['n']:04d}",
            "Backend Intern",
            "Build APIs",
            level,
            "CSC",
            open_date,
            close_date,
            company_name,
            max_slots,
        )
        if approved:
            internship.approve()
            internship.set_visible(visible)
        return internship

    return _make


@pytest.fixture
def make_student():
    def _make(user_id="U2310002B", year=3, major="CSC") -> Student:
        return Student(user_id, f"Student {user_id}", major, year, f"{user_id.lower()}@e.ntu.edu.sg")

    return _make


@pytest.fixture
def staff_member():
    return CareerCenterStaff("sng001", "Dr. Sng", "Career Center Staff", "CCDS", "sng001@ntu.edu.sg")


@pytest.fixture
def rep():
    r = CompanyRep("alice@techcorp.com", "Alice", "TechCorp", "Engineering", "HR", "alice@techcorp.com")
    r.approve()
    return r


# ============================================================
# STORE + SERVICES
# ============================================================

@pytest.fixture
def settings():
    return Settings(seed_demo_data=False, jwt_secret_key="test-secret", log_level="WARNING")


@pytest.fixture
def db():
    database = Database("sqlite://")
    seed_demo_data(database)
    return database


@pytest.fixture
def services(db, settings):
    """All services sharing one store, one id generator and a fixed clock."""
    ids = SequentialIdGenerator(db)
    kwargs = dict(id_generator=ids, today=lambda: TODAY, settings=settings)

    class Bundle:
        student = StudentService(db, **kwargs)
        company = CompanyRepService(db, **kwargs)
        staff = StaffService(db, **kwargs)
        registration = RegistrationService(db, **kwargs)

    return Bundle


@pytest.fixture
def published_internship(services):
    """Create + approve a TechCorp posting; returns its id."""

    def _publish(level="BASIC", max_slots=1, title="Backend Intern") -> str:
        internship = services.company.create_internship(
            "alice@techcorp.com", title, "Build APIs", level, "CSC",
            TODAY - timedelta(days=1), TODAY + timedelta(days=30), max_slots,
        )
        services.staff.approve_internship("sng001", internship.internship_id)
        return internship.internship_id

    return _publish


@pytest.fixture
def client(settings):
    app = create_app(
        database=Database("sqlite://"),
        settings=settings.model_copy(update={"seed_demo_data": True}),
        today=lambda: TODAY,
    )
    with TestClient(app) as c:
        yield c
