"""
FastAPI dependencies - hand each request a service bound to the app's store.

Usage:
    @router.get("/x")
    async def route(service: StudentService = Depends(get_student_service)):
        ...
"""

from fastapi import Request

from placement_portal.services import (
    AuthService,
    CompanyRepService,
    RegistrationService,
    StaffService,
    StudentService,
)


def _build(service_cls, request: Request):
    state = request.app.state
    return service_cls(state.db, id_generator=state.id_generator, today=state.today, settings=state.settings)


def get_auth_service(request: Request) -> AuthService:
    return _build(AuthService, request)


def get_registration_service(request: Request) -> RegistrationService:
    return _build(RegistrationService, request)


def get_student_service(request: Request) -> StudentService:
    return _build(StudentService, request)


def get_company_service(request: Request) -> CompanyRepService:
    return _build(CompanyRepService, request)


def get_staff_service(request: Request) -> StaffService:
    return _build(StaffService, request)
