from datetime import timedelta

import pytest

from placement_portal.core.exceptions import AuthorizationError, InvalidStateError
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.enums import ApplicationStatus, InternshipLevel, InternshipStatus
from placement_portal.domain.users import CompanyRep, filter_internships

from conftest import TODAY, StubPostingPort


def _create(rep, port, **overrides):
    details = dict(
        internship_id="INT0001", title="Backend Intern", description="Build APIs", level="BASIC",
        preferred_major="CSC", open_date=TODAY, close_date=TODAY + timedelta(days=14), max_slots=2,
    )
    details.update(overrides)
    return rep.create_internship(port=port, **details)


# ============================================================
# COMPANY REP
# ============================================================

def test_new_rep_is_pending():
    rep = CompanyRep("bob@x.com", "Bob", "X Pte Ltd", "Eng", "Lead", "bob@x.com")
    assert rep.is_pending
    assert not rep.is_rejected
    rep.reject("  Incomplete details ")
    assert rep.is_rejected
    assert rep.rejection_reason == "Incomplete details"
    rep.approve()
    assert rep.approved and rep.rejection_reason == ""


def test_unapproved_rep_cannot_post(posting_port):
    rep = CompanyRep("bob@x.com", "Bob", "X Pte Ltd", "Eng", "Lead", "bob@x.com")
    with pytest.raises(AuthorizationError):
        _create(rep, posting_port)


def test_posting_belongs_to_rep_company(rep, posting_port):
    internship = _create(rep, posting_port)
    assert internship.company_name == "TechCorp"
    assert internship.status == InternshipStatus.PENDING
    assert not internship.visible


def test_sixth_active_posting_is_refused(rep):
    assert rep.can_create_another_posting(StubPostingPort(active=4))
    with pytest.raises(InvalidStateError, match="limit of 5"):
        _create(rep, StubPostingPort(active=5))


def test_ownership_ignores_case(rep, make_internship):
    mine = make_internship(company_name="techcorp")
    theirs = make_internship(company_name="DataWorks")

    rep.set_internship_visibility(mine, False)
    assert not mine.visible
    with pytest.raises(AuthorizationError):
        rep.set_internship_visibility(theirs, False)
    with pytest.raises(InvalidStateError):
        rep.ensure_owns(None)


def test_close_posting_hides_approved_and_filled(rep, make_internship):
    approved = make_internship()
    rep.close_posting(approved)
    assert not approved.visible
    assert approved.status == InternshipStatus.APPROVED

    filled = make_internship(max_slots=1)
    filled.increment_confirmed_slots()
    rep.close_posting(filled)
    filled.decrement_confirmed_slots()
    assert not filled.visible

    pending = make_internship(approved=False)
    rep.close_posting(pending)
    assert pending.status == InternshipStatus.PENDING


def test_rep_decides_only_own_applications(rep, make_student, make_internship, port):
    mine = InternshipApplication("APP0001", make_student("U1"), make_internship(), port, TODAY)
    theirs = InternshipApplication(
        "APP0002", make_student("U2"), make_internship(company_name="DataWorks"), port, TODAY
    )

    rep.approve_application(mine)
    assert mine.status == ApplicationStatus.SUCCESSFUL
    with pytest.raises(AuthorizationError):
        rep.reject_application(theirs)
    assert theirs.status == ApplicationStatus.PENDING


def test_edit_goes_through_ownership(rep, make_internship):
    pending = make_internship(approved=False)
    rep.edit_internship(
        pending, title="New title", description="d", level="INTERMEDIATE", preferred_major="CSC",
        open_date=TODAY, close_date=TODAY, max_slots=3,
    )
    assert pending.title == "New title"
    assert pending.level == InternshipLevel.INTERMEDIATE
    assert pending.max_slots == 3


# ============================================================
# CAREER CENTER STAFF
# ============================================================

def test_staff_approval_publishes_by_default(staff_member, make_internship):
    internship = make_internship(approved=False)
    staff_member.approve_internship(internship)
    assert internship.status == InternshipStatus.APPROVED
    assert internship.visible

    quiet = make_internship(approved=False)
    staff_member.approve_internship(quiet, make_visible=False)
    assert quiet.status == InternshipStatus.APPROVED
    assert not quiet.visible


def test_staff_rejects_rep_with_reason(staff_member):
    rep = CompanyRep("bob@x.com", "Bob", "X Pte Ltd", "Eng", "Lead", "bob@x.com")
    staff_member.reject_company_rep(rep, "Unverified company")
    assert rep.is_rejected
    staff_member.approve_company_rep(rep)
    assert rep.approved


def test_filter_internships_matches_case_insensitively(staff_member, make_internship):
    basic = make_internship(company_name="TechCorp")
    advanced = make_internship(level=InternshipLevel.ADVANCED, company_name="DataWorks")
    pending = make_internship(approved=False)
    everything = [basic, advanced, pending]

    assert staff_member.filter_internships(everything) == everything
    assert filter_internships(everything, company_name="dataworks") == [advanced]
    assert filter_internships(everything, status=InternshipStatus.PENDING) == [pending]
    assert filter_internships(everything, level=InternshipLevel.BASIC, major="csc") == [basic, pending]
    assert filter_internships(None) == []
