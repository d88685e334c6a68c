"""
Career Center Staff Routes

GET /staff/internships - All internships (filters: status, major, level, company_name)
GET /staff/internships/pending - Postings awaiting a decision
POST /staff/internships/{id}/approve - Approve (and optionally publish) a posting
POST /staff/internships/{id}/reject - Reject a posting
GET /staff/company-reps - Company reps (pending_only=true for the review queue)
POST /staff/company-reps/{email}/approve - Approve a rep account
POST /staff/company-reps/{email}/reject - Reject a rep account
GET /staff/withdrawals/pending - Withdrawal requests awaiting a decision
POST /staff/withdrawals/{id}/approve - Approve withdrawal (reconciles slots)
POST /staff/withdrawals/{id}/reject - Reject withdrawal
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from placement_portal.api.deps import get_staff_service
from placement_portal.core.auth import get_current_staff
from placement_portal.domain.enums import InternshipLevel, InternshipStatus
from placement_portal.schemas.schemas import (
    CompanyRepResponse, InternshipApprove, InternshipResponse, RepRejectRequest,
    WithdrawalDecision, WithdrawalResponse,
    internship_response, rep_response, withdrawal_response,
)
from placement_portal.services.staff_service import StaffService

router = APIRouter(prefix="/staff", tags=["Career Center Staff"])


# ============================================================
# INTERNSHIPS
# ============================================================

@router.get("/internships", response_model=List[InternshipResponse])
async def list_internships(
    status: Optional[InternshipStatus] = Query(None),
    major: Optional[str] = Query(None),
    level: Optional[InternshipLevel] = Query(None),
    company_name: Optional[str] = Query(None),
    staff: dict = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    internships = service.filter_internships(
        staff["user_id"], status=status, major=major, level=level, company_name=company_name
    )
    return [internship_response(i) for i in internships]


@router.get("/internships/pending", response_model=List[InternshipResponse])
async def list_pending_internships(staff: dict = Depends(get_current_staff), service: StaffService = Depends(get_staff_service)):
    return [internship_response(i) for i in service.list_pending_internships()]


@router.post("/internships/{internship_id}/approve", response_model=InternshipResponse)
async def approve_internship(
    internship_id: str,
    body: Optional[InternshipApprove] = None,
    staff: dict = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    make_visible = body.make_visible if body else True
    return internship_response(service.approve_internship(staff["user_id"], internship_id, make_visible))


@router.post("/internships/{internship_id}/reject", response_model=InternshipResponse)
async def reject_internship(internship_id: str, staff: dict = Depends(get_current_staff), service: StaffService = Depends(get_staff_service)):
    return internship_response(service.reject_internship(staff["user_id"], internship_id))


# ============================================================
# COMPANY REPS
# ============================================================

@router.get("/company-reps", response_model=List[CompanyRepResponse])
async def list_company_reps(
    pending_only: bool = Query(False),
    staff: dict = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    reps = service.list_unapproved_reps() if pending_only else service.list_all_reps()
    return [rep_response(r) for r in reps]


@router.post("/company-reps/{email}/approve", response_model=CompanyRepResponse)
async def approve_company_rep(email: str, staff: dict = Depends(get_current_staff), service: StaffService = Depends(get_staff_service)):
    return rep_response(service.approve_company_rep(staff["user_id"], email))


@router.post("/company-reps/{email}/reject", response_model=CompanyRepResponse)
async def reject_company_rep(
    email: str,
    body: Optional[RepRejectRequest] = None,
    staff: dict = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    reason = body.reason if body else None
    return rep_response(service.reject_company_rep(staff["user_id"], email, reason))


# ============================================================
# WITHDRAWALS
# ============================================================

@router.get("/withdrawals/pending", response_model=List[WithdrawalResponse])
async def list_pending_withdrawals(staff: dict = Depends(get_current_staff), service: StaffService = Depends(get_staff_service)):
    return [withdrawal_response(wr) for wr in service.list_pending_withdrawals()]


@router.post("/withdrawals/{request_id}/approve", response_model=WithdrawalResponse)
async def approve_withdrawal(
    request_id: str,
    body: Optional[WithdrawalDecision] = None,
    staff: dict = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    note = body.note if body else None
    return withdrawal_response(service.approve_withdrawal(staff["user_id"], request_id, note))


@router.post("/withdrawals/{request_id}/reject", response_model=WithdrawalResponse)
async def reject_withdrawal(
    request_id: str,
    body: Optional[WithdrawalDecision] = None,
    staff: dict = Depends(get_current_staff),
    service: StaffService = Depends(get_staff_service),
):
    note = body.note if body else None
    return withdrawal_response(service.reject_withdrawal(staff["user_id"], request_id, note))
