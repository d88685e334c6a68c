"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Enums are reused from the domain so the API speaks the same vocabulary.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.enums import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    WithdrawalRequestStatus,
)
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import CompanyRep, Student
from placement_portal.domain.withdrawal import WithdrawalRequest


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(BaseModel):
    login_id: str = Field(..., min_length=1, description="Student id, staff id or rep email")

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: str
    name: str

class UserResponse(BaseModel):
    user_id: str
    role: str


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentResponse(BaseModel):
    user_id: str
    name: str
    major: str
    year_of_study: int
    email: str
    active_applications: int
    max_active_applications: int = Student.MAX_ACTIVE_APPLICATIONS
    has_confirmed_placement: bool


# ============================================================
# COMPANY REP SCHEMAS
# ============================================================

class CompanyRepRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    company_name: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100)
    email: EmailStr

class CompanyRepResponse(BaseModel):
    user_id: str
    name: str
    company_name: str
    department: str
    position: str
    email: str
    approved: bool
    rejection_reason: str = ""

class RepRejectRequest(BaseModel):
    reason: Optional[str] = None


# ============================================================
# INTERNSHIP SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    level: InternshipLevel
    preferred_major: str = Field(..., min_length=1, max_length=100)
    open_date: date
    close_date: date
    max_slots: int = Field(..., ge=1, le=Internship.MAX_SLOTS)

    @model_validator(mode="after")
    def check_window(self):
        if self.close_date < self.open_date:
            raise ValueError("Close date cannot be before open date")
        return self

class InternshipUpdate(InternshipCreate):
    pass

class VisibilityUpdate(BaseModel):
    visible: bool

class InternshipApprove(BaseModel):
    make_visible: bool = True

class InternshipResponse(BaseModel):
    internship_id: str
    title: str
    description: str
    level: InternshipLevel
    preferred_major: str
    open_date: date
    close_date: date
    company_name: str
    max_slots: int
    confirmed_slots: int
    remaining_slots: int
    visible: bool
    status: InternshipStatus


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    internship_id: str

class ApplicationResponse(BaseModel):
    application_id: str
    student_id: str
    internship_id: str
    internship_title: Optional[str] = None
    company_name: Optional[str] = None
    applied_on: date
    status: ApplicationStatus
    student_accepted: bool


# ============================================================
# WITHDRAWAL SCHEMAS
# ============================================================

class WithdrawalCreate(BaseModel):
    reason: str = Field(..., min_length=1, max_length=2000)

class WithdrawalDecision(BaseModel):
    note: Optional[str] = Field(None, max_length=2000)

class WithdrawalResponse(BaseModel):
    request_id: str
    application_id: str
    student_id: str
    requested_on: date
    reason: str
    status: WithdrawalRequestStatus
    processed_by: Optional[str] = None
    processed_on: Optional[date] = None
    staff_note: Optional[str] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
    error: str


# ============================================================
# ENTITY -> RESPONSE
# ============================================================

def internship_response(i: Internship) -> InternshipResponse:
    return InternshipResponse(
        internship_id=i.internship_id, title=i.title, description=i.description,
        level=i.level, preferred_major=i.preferred_major, open_date=i.open_date,
        close_date=i.close_date, company_name=i.company_name, max_slots=i.max_slots,
        confirmed_slots=i.confirmed_slots, remaining_slots=i.remaining_slots,
        visible=i.visible, status=i.status,
    )


def application_response(a: InternshipApplication) -> ApplicationResponse:
    internship = a.internship
    return ApplicationResponse(
        application_id=a.application_id, student_id=a.student.user_id,
        internship_id=a.internship_id,
        internship_title=internship.title if internship else None,
        company_name=internship.company_name if internship else None,
        applied_on=a.applied_on, status=a.status, student_accepted=a.student_accepted,
    )


def withdrawal_response(wr: WithdrawalRequest) -> WithdrawalResponse:
    return WithdrawalResponse(
        request_id=wr.request_id, application_id=wr.application.application_id,
        student_id=wr.requested_by.user_id, requested_on=wr.requested_on,
        reason=wr.reason, status=wr.status,
        processed_by=wr.processed_by.user_id if wr.processed_by else None,
        processed_on=wr.processed_on, staff_note=wr.staff_note,
    )


def rep_response(rep: CompanyRep) -> CompanyRepResponse:
    return CompanyRepResponse(
        user_id=rep.user_id, name=rep.name, company_name=rep.company_name,
        department=rep.department, position=rep.position, email=rep.email,
        approved=rep.approved, rejection_reason=rep.rejection_reason,
    )
