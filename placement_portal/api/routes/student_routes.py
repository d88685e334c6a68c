"""
Student Routes

GET /students/me - Own profile with cap/placement summary
GET /students/internships - Eligible open internships (filters: major, level, company_name)
POST /students/applications - Apply to an internship
GET /students/applications - My applications
POST /students/applications/{id}/accept - Accept a successful offer
POST /students/applications/{id}/withdrawals - Request withdrawal
GET /students/withdrawals - My withdrawal requests
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from placement_portal.api.deps import get_student_service
from placement_portal.core.auth import get_current_student
from placement_portal.domain.enums import InternshipLevel
from placement_portal.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, InternshipResponse, StudentResponse,
    WithdrawalCreate, WithdrawalResponse,
    application_response, internship_response, withdrawal_response,
)
from placement_portal.services.student_service import StudentService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/me", response_model=StudentResponse)
async def get_profile(student: dict = Depends(get_current_student), service: StudentService = Depends(get_student_service)):
    """Get current student's profile."""
    s = service.get_student(student["user_id"])
    return StudentResponse(
        user_id=s.user_id, name=s.name, major=s.major, year_of_study=s.year_of_study, email=s.email,
        active_applications=service.active_application_count(s.user_id),
        has_confirmed_placement=service.has_confirmed_placement(s.user_id),
    )


@router.get("/internships", response_model=List[InternshipResponse])
async def list_internships(
    major: Optional[str] = Query(None),
    level: Optional[InternshipLevel] = Query(None),
    company_name: Optional[str] = Query(None),
    student: dict = Depends(get_current_student),
    service: StudentService = Depends(get_student_service),
):
    """Internships the student could apply to today."""
    internships = service.view_filtered_internships(student["user_id"], major=major, level=level, company_name=company_name)
    return [internship_response(i) for i in internships]


@router.post("/applications", response_model=ApplicationResponse, status_code=201)
async def apply(body: ApplicationCreate, student: dict = Depends(get_current_student), service: StudentService = Depends(get_student_service)):
    """Apply to an internship. At most 3 active applications at a time."""
    app = service.apply(student["user_id"], body.internship_id)
    return application_response(app)


@router.get("/applications", response_model=List[ApplicationResponse])
async def my_applications(student: dict = Depends(get_current_student), service: StudentService = Depends(get_student_service)):
    return [application_response(a) for a in service.view_my_applications(student["user_id"])]


@router.post("/applications/{application_id}/accept", response_model=ApplicationResponse)
async def accept_offer(application_id: str, student: dict = Depends(get_current_student), service: StudentService = Depends(get_student_service)):
    """Accept a successful offer. All other active applications are withdrawn."""
    app = service.confirm_acceptance(student["user_id"], application_id)
    return application_response(app)


@router.post("/applications/{application_id}/withdrawals", response_model=WithdrawalResponse, status_code=201)
async def request_withdrawal(
    application_id: str,
    body: WithdrawalCreate,
    student: dict = Depends(get_current_student),
    service: StudentService = Depends(get_student_service),
):
    """Ask career-center staff to withdraw an application."""
    request = service.request_withdrawal(student["user_id"], application_id, body.reason)
    return withdrawal_response(request)


@router.get("/withdrawals", response_model=List[WithdrawalResponse])
async def my_withdrawals(student: dict = Depends(get_current_student), service: StudentService = Depends(get_student_service)):
    return [withdrawal_response(wr) for wr in service.view_my_withdrawal_requests(student["user_id"])]
