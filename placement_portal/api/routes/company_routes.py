"""
Company Routes

GET /company/internships - Own company's postings
POST /company/internships - Create posting (starts PENDING)
GET /company/internships/{id} - Posting details
PUT /company/internships/{id} - Edit posting (PENDING only)
DELETE /company/internships/{id} - Delete posting (PENDING/REJECTED only)
PUT /company/internships/{id}/visibility - Toggle visibility (APPROVED only for on)
POST /company/internships/{id}/close - Hide an approved posting
GET /company/internships/{id}/applications - Applications received
POST /company/applications/{id}/successful - Make an offer
POST /company/applications/{id}/unsuccessful - Turn down
"""

from typing import List

from fastapi import APIRouter, Depends

from placement_portal.api.deps import get_company_service
from placement_portal.core.auth import get_current_company_rep
from placement_portal.schemas.schemas import (
    ApplicationResponse, InternshipCreate, InternshipResponse, InternshipUpdate,
    MessageResponse, VisibilityUpdate,
    application_response, internship_response,
)
from placement_portal.services.company_service import CompanyRepService

router = APIRouter(prefix="/company", tags=["Company"])


@router.get("/internships", response_model=List[InternshipResponse])
async def list_internships(rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    """Get all internships posted by this rep's company."""
    return [internship_response(i) for i in service.list_internships(rep["user_id"])]


@router.post("/internships", response_model=InternshipResponse, status_code=201)
async def create_internship(data: InternshipCreate, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    """Create a new posting. It stays hidden until staff approve it."""
    internship = service.create_internship(
        rep["user_id"], data.title, data.description, data.level, data.preferred_major,
        data.open_date, data.close_date, data.max_slots,
    )
    return internship_response(internship)


@router.get("/internships/{internship_id}", response_model=InternshipResponse)
async def get_internship(internship_id: str, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    return internship_response(service.get_internship(rep["user_id"], internship_id))


@router.put("/internships/{internship_id}", response_model=InternshipResponse)
async def update_internship(
    internship_id: str,
    data: InternshipUpdate,
    rep: dict = Depends(get_current_company_rep),
    service: CompanyRepService = Depends(get_company_service),
):
    """Edit a posting. Only possible while it is still PENDING."""
    internship = service.edit_internship(
        rep["user_id"], internship_id, data.title, data.description, data.level,
        data.preferred_major, data.open_date, data.close_date, data.max_slots,
    )
    return internship_response(internship)


@router.delete("/internships/{internship_id}", response_model=MessageResponse)
async def delete_internship(internship_id: str, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    service.delete_internship(rep["user_id"], internship_id)
    return MessageResponse(message="Internship deleted successfully")


@router.put("/internships/{internship_id}/visibility", response_model=InternshipResponse)
async def set_visibility(
    internship_id: str,
    data: VisibilityUpdate,
    rep: dict = Depends(get_current_company_rep),
    service: CompanyRepService = Depends(get_company_service),
):
    return internship_response(service.set_visibility(rep["user_id"], internship_id, data.visible))


@router.post("/internships/{internship_id}/close", response_model=InternshipResponse)
async def close_posting(internship_id: str, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    return internship_response(service.close_posting(rep["user_id"], internship_id))


@router.get("/internships/{internship_id}/applications", response_model=List[ApplicationResponse])
async def list_applications(internship_id: str, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    """Get applications received for one of this company's postings."""
    return [application_response(a) for a in service.list_applications(rep["user_id"], internship_id)]


@router.post("/applications/{application_id}/successful", response_model=ApplicationResponse)
async def mark_successful(application_id: str, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    return application_response(service.mark_application_successful(rep["user_id"], application_id))


@router.post("/applications/{application_id}/unsuccessful", response_model=ApplicationResponse)
async def mark_unsuccessful(application_id: str, rep: dict = Depends(get_current_company_rep), service: CompanyRepService = Depends(get_company_service)):
    return application_response(service.mark_application_unsuccessful(rep["user_id"], application_id))
