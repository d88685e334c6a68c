"""
Table models. Enum columns hold the enum value (its upper-case name).
"""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


# Users
# ---------------------
class StudentModel(Base):
    __tablename__ = "students"

    user_id = Column(String(20), primary_key=True)
    name = Column(String(100), nullable=False)
    major = Column(String(100), nullable=False)
    year_of_study = Column(Integer, nullable=False)
    email = Column(String(200), nullable=False)


class CompanyRepModel(Base):
    __tablename__ = "company_reps"

    user_id = Column(String(200), primary_key=True)  # lower-cased email
    name = Column(String(100), nullable=False)
    company_name = Column(String(200), nullable=False, index=True)
    department = Column(String(100), nullable=False)
    position = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False, unique=True)
    approved = Column(Boolean, nullable=False, default=False)
    rejection_reason = Column(Text, nullable=False, default="")


class CareerCenterStaffModel(Base):
    __tablename__ = "staff"

    user_id = Column(String(20), primary_key=True)
    name = Column(String(100), nullable=False)
    role = Column(String(100), nullable=False)
    department = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False)


# Internships
# ---------------------
class InternshipModel(Base):
    __tablename__ = "internships"

    internship_id = Column(String(20), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    level = Column(String(20), nullable=False)
    preferred_major = Column(String(100), nullable=False)
    open_date = Column(Date, nullable=False)
    close_date = Column(Date, nullable=False)
    company_name = Column(String(200), nullable=False, index=True)
    max_slots = Column(Integer, nullable=False)
    confirmed_slots = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, index=True)
    visible = Column(Boolean, nullable=False, default=False)
    relist_on_vacancy = Column(Boolean, nullable=False, default=False)


# Applications
# ---------------------
class ApplicationModel(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("student_id", "internship_id", name="unique_student_internship_application"),
    )

    application_id = Column(String(20), primary_key=True)
    student_id = Column(String(20), ForeignKey("students.user_id"), nullable=False, index=True)
    internship_id = Column(String(20), ForeignKey("internships.internship_id"), nullable=False, index=True)
    applied_on = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)
    student_accepted = Column(Boolean, nullable=False, default=False)


# Withdrawal requests
# ---------------------
class WithdrawalRequestModel(Base):
    __tablename__ = "withdrawals"

    request_id = Column(String(20), primary_key=True)
    application_id = Column(String(20), ForeignKey("applications.application_id"), nullable=False, index=True)
    student_id = Column(String(20), ForeignKey("students.user_id"), nullable=False, index=True)
    requested_on = Column(Date, nullable=False)
    reason = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, index=True)
    processed_by = Column(String(20), ForeignKey("staff.user_id"), nullable=True)
    processed_on = Column(Date, nullable=True)
    staff_note = Column(Text, nullable=True)
