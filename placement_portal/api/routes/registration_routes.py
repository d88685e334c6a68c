"""
Registration Routes

POST /registrations/company-reps - Register a company representative (pending approval)
"""

from fastapi import APIRouter, Depends

from placement_portal.api.deps import get_registration_service
from placement_portal.schemas.schemas import CompanyRepRegister, CompanyRepResponse, rep_response
from placement_portal.services.registration_service import RegistrationService

router = APIRouter(prefix="/registrations", tags=["Registration"])


@router.post("/company-reps", response_model=CompanyRepResponse, status_code=201)
async def register_company_rep(data: CompanyRepRegister, service: RegistrationService = Depends(get_registration_service)):
    """Register as a company representative. Login works once staff approve."""
    rep = service.register_company_rep(
        data.name, data.company_name, data.department, data.position, data.email
    )
    return rep_response(rep)
