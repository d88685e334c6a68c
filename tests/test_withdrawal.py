import pytest

from placement_portal.core.exceptions import AuthorizationError, InvalidStateError, ValidationError
from placement_portal.domain.application import InternshipApplication
from placement_portal.domain.enums import ApplicationStatus, InternshipStatus, WithdrawalRequestStatus
from placement_portal.domain.validation import MAX_NOTE_LENGTH
from placement_portal.domain.withdrawal import WithdrawalRequest

from conftest import TODAY


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def accepted(student, make_internship, port):
    app = InternshipApplication("APP0001", student, make_internship(max_slots=1), port, TODAY)
    app.mark_successful()
    app.confirm_acceptance(port)
    return app


def test_only_the_owner_may_request(accepted, make_student):
    with pytest.raises(AuthorizationError):
        WithdrawalRequest("WRQ0001", accepted, make_student("U9999999Z"), "Changed my mind")


def test_reason_is_trimmed_and_capped(accepted, student):
    request = WithdrawalRequest("WRQ0001", accepted, student, "  " + "x" * 3000 + "  ", TODAY)
    assert request.status == WithdrawalRequestStatus.PENDING
    assert len(request.reason) == MAX_NOTE_LENGTH
    assert request.processed_by is None


def test_approving_accepted_placement_frees_the_slot(accepted, student, staff_member):
    internship = accepted.internship
    assert internship.status == InternshipStatus.FILLED

    request = WithdrawalRequest("WRQ0001", accepted, student, "Family reasons", TODAY)
    staff_member.process_withdrawal(request, approve=True, note="ok")

    assert request.status == WithdrawalRequestStatus.APPROVED
    assert request.processed_by == staff_member
    assert request.staff_note == "ok"
    assert not accepted.student_accepted
    assert accepted.status == ApplicationStatus.SUCCESSFUL
    assert internship.confirmed_slots == 0
    assert internship.status == InternshipStatus.APPROVED


def test_approving_pending_application_withdraws_it(student, make_internship, port, staff_member):
    app = InternshipApplication("APP0001", student, make_internship(), port, TODAY)
    request = WithdrawalRequest("WRQ0001", app, student, "Found another offer", TODAY)
    request.approve(staff_member, on=TODAY)

    assert app.status == ApplicationStatus.WITHDRAWN
    assert request.processed_on == TODAY
    assert request.staff_note == ""


def test_rejection_leaves_application_untouched(accepted, student, staff_member):
    request = WithdrawalRequest("WRQ0001", accepted, student, "Family reasons", TODAY)
    staff_member.process_withdrawal(request, approve=False, note="Too late")

    assert request.status == WithdrawalRequestStatus.REJECTED
    assert accepted.student_accepted
    assert accepted.internship.confirmed_slots == 1


def test_request_is_processed_once(accepted, student, staff_member):
    request = WithdrawalRequest("WRQ0001", accepted, student, "Family reasons", TODAY)
    request.approve(staff_member)
    with pytest.raises(InvalidStateError, match="already processed"):
        request.approve(staff_member)
    with pytest.raises(InvalidStateError):
        request.reject(staff_member)
    with pytest.raises(InvalidStateError):
        request.update_reason("new reason")
    assert accepted.internship.confirmed_slots == 0


def test_approval_with_detached_internship_changes_nothing(accepted, student, staff_member):
    internship = accepted.internship
    request = WithdrawalRequest("WRQ0001", accepted, student, "Family reasons", TODAY)
    accepted.detach_internship()

    with pytest.raises(InvalidStateError, match="not attached"):
        request.approve(staff_member)

    assert request.is_pending()
    assert accepted.student_accepted
    assert internship.confirmed_slots == 1


def test_reason_can_be_updated_while_pending(accepted, student):
    request = WithdrawalRequest("WRQ0001", accepted, student, "first", TODAY)
    request.update_reason("  second  ")
    assert request.reason == "second"


def test_bad_note_is_refused_before_anything_changes(accepted, student, staff_member):
    internship = accepted.internship
    request = WithdrawalRequest("WRQ0001", accepted, student, "Family reasons", TODAY)

    with pytest.raises(ValidationError, match="Note must be text"):
        request.approve(staff_member, note=123)

    assert request.is_pending()
    assert request.processed_by is None
    assert accepted.student_accepted
    assert internship.confirmed_slots == 1


def test_bad_note_leaves_pending_application_pending(student, make_internship, port, staff_member):
    app = InternshipApplication("APP0001", student, make_internship(), port, TODAY)
    request = WithdrawalRequest("WRQ0001", app, student, "Found another offer", TODAY)

    with pytest.raises(ValidationError):
        request.approve(staff_member, note=123)

    assert app.status == ApplicationStatus.PENDING
    assert request.is_pending()
