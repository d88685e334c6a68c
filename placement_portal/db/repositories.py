"""
Repositories - CRUD + finders over the SQLAlchemy tables.

Each repository converts between one table model and its domain entity:
1. students        - Student
2. company_reps    - CompanyRep (keyed by lower-cased email)
3. staff           - CareerCenterStaff
4. internships     - Internship
5. applications    - InternshipApplication (also the AppReadPort)
6. withdrawals     - WithdrawalRequest

Every call joins the caller's unit of work when one is open, otherwise
it runs in a short session of its own. Entities never import this
module; the service layer hands the repositories to them as read ports.
"""

from typing import Generic, Iterable, List, Optional, TypeVar

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from placement_portal.core.exceptions import NotFoundError
from placement_portal.db.database import Database
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.enums import ApplicationStatus, InternshipStatus, WithdrawalRequestStatus
from placement_portal.domain.internship import Internship
from placement_portal.domain.users import CareerCenterStaff, CompanyRep, Student
from placement_portal.domain.withdrawal import WithdrawalRequest
from placement_portal.models import (
    ApplicationModel,
    CareerCenterStaffModel,
    CompanyRepModel,
    InternshipModel,
    StudentModel,
    WithdrawalRequestModel,
)

T = TypeVar("T")

ACTIVE_POSTING_STATUSES = (InternshipStatus.PENDING.value, InternshipStatus.APPROVED.value)


# ============================================================
# ROW -> ENTITY
# ============================================================

def _student(row: StudentModel) -> Student:
    return Student(row.user_id, row.name, row.major, row.year_of_study, row.email)


def _staff(row: CareerCenterStaffModel) -> CareerCenterStaff:
    return CareerCenterStaff(row.user_id, row.name, row.role, row.department, row.email)


def _rep(row: CompanyRepModel) -> CompanyRep:
    rep = CompanyRep(row.user_id, row.name, row.company_name, row.department, row.position, row.email)
    rep.approved = row.approved
    rep.rejection_reason = row.rejection_reason or ""
    return rep


def _internship(row: InternshipModel) -> Internship:
    return Internship.restore(
        row.internship_id, row.title, row.description, row.level, row.preferred_major,
        row.open_date, row.close_date, row.company_name, row.max_slots,
        confirmed_slots=row.confirmed_slots, status=row.status,
        visible=row.visible, relist_on_vacancy=row.relist_on_vacancy,
    )


def _application(session: Session, row: ApplicationModel) -> InternshipApplication:
    internship_row = session.get(InternshipModel, row.internship_id)
    return InternshipApplication.restore(
        row.application_id,
        _student(session.get(StudentModel, row.student_id)),
        row.internship_id,
        _internship(internship_row) if internship_row is not None else None,
        row.applied_on,
        row.status,
        row.student_accepted,
    )


def _withdrawal(session: Session, row: WithdrawalRequestModel) -> WithdrawalRequest:
    staff_row = session.get(CareerCenterStaffModel, row.processed_by) if row.processed_by else None
    return WithdrawalRequest.restore(
        row.request_id,
        _application(session, session.get(ApplicationModel, row.application_id)),
        row.requested_on,
        row.reason,
        row.status,
        processed_by=_staff(staff_row) if staff_row is not None else None,
        processed_on=row.processed_on,
        staff_note=row.staff_note,
    )


# ============================================================
# BASE
# ============================================================

class CrudRepository(Generic[T]):
    """Upsert-by-id repository over one table model."""

    model = None
    entity_label: str = "Entity"

    def __init__(self, db: Database):
        self.db = db

    def _to_entity(self, session: Session, row) -> T:
        raise NotImplementedError

    def _to_row(self, entity: T):
        raise NotImplementedError

    def _normalize_id(self, entity_id: str) -> str:
        return entity_id

    def _primary_key(self):
        return self.model.__mapper__.primary_key[0]

    def _query(self, *criteria) -> List[T]:
        stmt = select(self.model).where(*criteria).order_by(self._primary_key())
        with self.db.session() as session:
            return [self._to_entity(session, row) for row in session.scalars(stmt).all()]

    def find_by_id(self, entity_id: Optional[str]) -> Optional[T]:
        if entity_id is None:
            return None
        with self.db.session() as session:
            row = session.get(self.model, self._normalize_id(entity_id))
            return self._to_entity(session, row) if row is not None else None

    def get(self, entity_id: Optional[str]) -> T:
        """Like find_by_id, but a miss is a NotFoundError."""
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.entity_label} not found: {entity_id}")
        return entity

    def find_all(self) -> List[T]:
        return self._query()

    def save(self, entity: T) -> T:
        with self.db.session() as session:
            session.merge(self._to_row(entity))
            session.flush()
        return entity

    def save_all(self, entities: Iterable[T]) -> List[T]:
        return [self.save(e) for e in entities]

    def delete_by_id(self, entity_id: str) -> None:
        with self.db.session() as session:
            row = session.get(self.model, self._normalize_id(entity_id))
            if row is not None:
                session.delete(row)
                session.flush()

    def exists_by_id(self, entity_id: Optional[str]) -> bool:
        if entity_id is None:
            return False
        with self.db.session() as session:
            return session.get(self.model, self._normalize_id(entity_id)) is not None

    def count(self) -> int:
        with self.db.session() as session:
            return session.scalar(select(func.count()).select_from(self.model))


# ============================================================
# USERS
# ============================================================

class StudentRepository(CrudRepository[Student]):
    model = StudentModel
    entity_label = "Student"

    def _to_entity(self, session: Session, row: StudentModel) -> Student:
        return _student(row)

    def _to_row(self, s: Student) -> StudentModel:
        return StudentModel(
            user_id=s.user_id, name=s.name, major=s.major, year_of_study=s.year_of_study, email=s.email,
        )


class CareerCenterStaffRepository(CrudRepository[CareerCenterStaff]):
    model = CareerCenterStaffModel
    entity_label = "Staff member"

    def _to_entity(self, session: Session, row: CareerCenterStaffModel) -> CareerCenterStaff:
        return _staff(row)

    def _to_row(self, s: CareerCenterStaff) -> CareerCenterStaffModel:
        return CareerCenterStaffModel(
            user_id=s.user_id, name=s.name, role=s.role, department=s.department, email=s.email,
        )


class CompanyRepRepository(CrudRepository[CompanyRep]):
    """Reps are keyed by their lower-cased email; also the RepPostingReadPort."""

    model = CompanyRepModel
    entity_label = "Company representative"

    def _normalize_id(self, entity_id: str) -> str:
        return entity_id.strip().lower()

    def _to_entity(self, session: Session, row: CompanyRepModel) -> CompanyRep:
        return _rep(row)

    def _to_row(self, r: CompanyRep) -> CompanyRepModel:
        return CompanyRepModel(
            user_id=self._normalize_id(r.user_id), name=r.name, company_name=r.company_name,
            department=r.department, position=r.position, email=r.email,
            approved=r.approved, rejection_reason=r.rejection_reason,
        )

    def find_by_email(self, email: Optional[str]) -> Optional[CompanyRep]:
        if not email:
            return None
        matches = self._query(func.lower(CompanyRepModel.email) == email.strip().lower())
        return matches[0] if matches else None

    def get_by_email(self, email: Optional[str]) -> CompanyRep:
        rep = self.find_by_email(email)
        if rep is None:
            raise NotFoundError(f"Company representative not found: {email}")
        return rep

    def find_pending(self) -> List[CompanyRep]:
        return self._query(CompanyRepModel.approved.is_(False), CompanyRepModel.rejection_reason == "")

    # ---------- RepPostingReadPort ----------

    def count_active_postings_for_rep(self, rep_id: str) -> int:
        rep = self.find_by_id(rep_id)
        if rep is None:
            return 0
        stmt = (
            select(func.count())
            .select_from(InternshipModel)
            .where(
                func.lower(InternshipModel.company_name) == rep.company_name.lower(),
                InternshipModel.status.in_(ACTIVE_POSTING_STATUSES),
            )
        )
        with self.db.session() as session:
            return session.scalar(stmt)


# ============================================================
# INTERNSHIPS
# ============================================================

class InternshipRepository(CrudRepository[Internship]):
    model = InternshipModel
    entity_label = "Internship"

    def _to_entity(self, session: Session, row: InternshipModel) -> Internship:
        return _internship(row)

    def _to_row(self, i: Internship) -> InternshipModel:
        return InternshipModel(
            internship_id=i.internship_id, title=i.title, description=i.description,
            level=i.level.value, preferred_major=i.preferred_major,
            open_date=i.open_date, close_date=i.close_date, company_name=i.company_name,
            max_slots=i.max_slots, confirmed_slots=i.confirmed_slots, status=i.status.value,
            visible=i.visible, relist_on_vacancy=i.relist_on_vacancy,
        )

    def find_by_status(self, status: Optional[InternshipStatus]) -> List[Internship]:
        if status is None:
            return []
        return self._query(InternshipModel.status == status.value)

    def find_by_company_name(self, company_name: Optional[str]) -> List[Internship]:
        if company_name is None:
            return []
        return self._query(func.lower(InternshipModel.company_name) == company_name.strip().lower())


# ============================================================
# APPLICATIONS
# ============================================================

ACTIVE_APPLICATION = or_(
    ApplicationModel.status == ApplicationStatus.PENDING.value,
    and_(
        ApplicationModel.status == ApplicationStatus.SUCCESSFUL.value,
        ApplicationModel.student_accepted.is_(False),
    ),
)


class ApplicationRepository(CrudRepository[InternshipApplication]):
    """Application store; implements AppReadPort for Student/Application."""

    model = ApplicationModel
    entity_label = "Application"

    def _to_entity(self, session: Session, row: ApplicationModel) -> InternshipApplication:
        return _application(session, row)

    def _to_row(self, a: InternshipApplication) -> ApplicationModel:
        return ApplicationModel(
            application_id=a.application_id, student_id=a.student.user_id,
            internship_id=a.internship_id, applied_on=a.applied_on,
            status=a.status.value, student_accepted=a.student_accepted,
        )

    def _count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(ApplicationModel).where(*criteria)
        with self.db.session() as session:
            return session.scalar(stmt)

    def find_by_student(self, student_id: Optional[str]) -> List[InternshipApplication]:
        if student_id is None:
            return []
        return self._query(ApplicationModel.student_id == student_id)

    def find_by_internship(self, internship_id: Optional[str]) -> List[InternshipApplication]:
        if internship_id is None:
            return []
        return self._query(ApplicationModel.internship_id == internship_id)

    def exists_by_student_and_internship(self, student_id: Optional[str], internship_id: Optional[str]) -> bool:
        if student_id is None or internship_id is None:
            return False
        return self._count(
            ApplicationModel.student_id == student_id,
            ApplicationModel.internship_id == internship_id,
        ) > 0

    def count_active_by_student(self, student_id: Optional[str]) -> int:
        if student_id is None:
            return 0
        return self._count(ApplicationModel.student_id == student_id, ACTIVE_APPLICATION)

    # ---------- AppReadPort ----------

    def count_active_applications(self, student_id: str) -> int:
        return self.count_active_by_student(student_id)

    def has_confirmed_placement(self, student_id: str) -> bool:
        return self._count(
            ApplicationModel.student_id == student_id,
            ApplicationModel.status == ApplicationStatus.SUCCESSFUL.value,
            ApplicationModel.student_accepted.is_(True),
        ) > 0


# ============================================================
# WITHDRAWAL REQUESTS
# ============================================================

class WithdrawalRequestRepository(CrudRepository[WithdrawalRequest]):
    model = WithdrawalRequestModel
    entity_label = "Withdrawal request"

    def _to_entity(self, session: Session, row: WithdrawalRequestModel) -> WithdrawalRequest:
        return _withdrawal(session, row)

    def _to_row(self, wr: WithdrawalRequest) -> WithdrawalRequestModel:
        return WithdrawalRequestModel(
            request_id=wr.request_id, application_id=wr.application.application_id,
            student_id=wr.requested_by.user_id, requested_on=wr.requested_on,
            reason=wr.reason, status=wr.status.value,
            processed_by=wr.processed_by.user_id if wr.processed_by else None,
            processed_on=wr.processed_on, staff_note=wr.staff_note,
        )

    def find_by_student(self, student_id: Optional[str]) -> List[WithdrawalRequest]:
        if student_id is None:
            return []
        return self._query(WithdrawalRequestModel.student_id == student_id)

    def find_by_application_id(self, application_id: Optional[str]) -> List[WithdrawalRequest]:
        if application_id is None:
            return []
        return self._query(WithdrawalRequestModel.application_id == application_id)

    def find_pending_for_application(self, application_id: Optional[str]) -> Optional[WithdrawalRequest]:
        for wr in self.find_by_application_id(application_id):
            if wr.is_pending():
                return wr
        return None

    def find_pending(self) -> List[WithdrawalRequest]:
        return self._query(WithdrawalRequestModel.status == WithdrawalRequestStatus.PENDING.value)
