"""
Demo data - a small cast of users so the API is usable right after start.

Only fills tables that are empty; running it twice is harmless.
"""

import logging

from placement_portal.db.database import Database
from placement_portal.db.repositories import (
    CareerCenterStaffRepository,
    CompanyRepRepository,
    StudentRepository,
)
from placement_portal.domain.users import CareerCenterStaff, CompanyRep, Student

logger = logging.getLogger(__name__)

DEMO_STUDENTS = [
    ("U2310001A", "Tan Wei Ling", "CSC", 1, "tanwl@e.ntu.edu.sg"),
    ("U2310002B", "Ng Jia Hui", "EEE", 3, "ngjh@e.ntu.edu.sg"),
    ("U2310003C", "Lim Kai Xuan", "CSC", 4, "limkx@e.ntu.edu.sg"),
]

DEMO_STAFF = [
    ("sng001", "Dr. Sng Hui Min", "Career Center Staff", "CCDS", "sng001@ntu.edu.sg"),
]

# (name, company, department, position, email, approved)
DEMO_REPS = [
    ("Alice Wong", "TechCorp", "Engineering", "HR Manager", "alice@techcorp.com", True),
    ("Ben Koh", "DataWorks", "Analytics", "Recruiter", "ben@dataworks.io", False),
]


def seed_demo_data(db: Database) -> None:
    students = StudentRepository(db)
    staff = CareerCenterStaffRepository(db)
    reps = CompanyRepRepository(db)

    with db.session():
        if not students.count():
            students.save_all(Student(*row) for row in DEMO_STUDENTS)
        if not staff.count():
            staff.save_all(CareerCenterStaff(*row) for row in DEMO_STAFF)
        if not reps.count():
            for name, company, department, position, email, approved in DEMO_REPS:
                rep = CompanyRep(email, name, company, department, position, email)
                if approved:
                    rep.approve()
                reps.save(rep)

    logger.info(
        "Demo data ready: %d students, %d staff, %d company reps",
        students.count(), staff.count(), reps.count(),
    )
