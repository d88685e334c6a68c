import pytest

from placement_portal.core.exceptions import CapacityExceededError, InvalidStateError, NotEligibleError, ValidationError
from placement_portal.domain.enums import InternshipLevel

from conftest import TODAY, StubAppReadPort


@pytest.mark.parametrize(
    "year, level, expected",
    [
        (1, InternshipLevel.BASIC, True),
        (2, InternshipLevel.INTERMEDIATE, False),
        (2, InternshipLevel.ADVANCED, False),
        (3, InternshipLevel.INTERMEDIATE, True),
        (4, InternshipLevel.ADVANCED, True),
        (3, None, False),
    ],
)
def test_eligibility_by_year(make_student, year, level, expected):
    assert make_student(year=year).is_eligible_for(level) is expected


@pytest.mark.parametrize("year", [0, 5, True])
def test_year_of_study_out_of_range(make_student, year):
    with pytest.raises(ValidationError):
        make_student(year=year)


def test_year_one_only_sees_basic_postings(make_student, make_internship):
    basic = make_internship(level=InternshipLevel.BASIC)
    advanced = make_internship(level=InternshipLevel.ADVANCED)
    junior = make_student(year=1)

    assert junior.filter_eligible_visible_open([basic, advanced], TODAY) == [basic]
    with pytest.raises(NotEligibleError, match="ADVANCED"):
        junior.assert_can_apply(advanced, StubAppReadPort(), TODAY)


def test_browse_excludes_hidden_pending_and_full_postings(make_student, make_internship):
    open_posting = make_internship()
    hidden = make_internship(visible=False)
    pending = make_internship(approved=False)
    full = make_internship(max_slots=1)
    full.increment_confirmed_slots()

    result = make_student().filter_eligible_visible_open([open_posting, hidden, pending, full, None], TODAY)
    assert result == [open_posting]


def test_browse_handles_missing_collection(make_student):
    assert make_student().filter_eligible_visible_open(None, TODAY) == []


def test_can_apply_to_open_eligible_posting(make_student, make_internship, port):
    make_student().assert_can_apply(make_internship(), port, TODAY)


def test_full_posting_is_a_capacity_error(make_student, make_internship, port):
    full = make_internship(max_slots=1)
    full.increment_confirmed_slots()
    with pytest.raises(CapacityExceededError):
        make_student().assert_can_apply(full, port, TODAY)


def test_closed_posting_is_a_state_error(make_student, make_internship, port):
    with pytest.raises(InvalidStateError):
        make_student().assert_can_apply(make_internship(visible=False), port, TODAY)


def test_confirmed_placement_blocks_new_applications(make_student, make_internship):
    with pytest.raises(NotEligibleError, match="confirmed placement"):
        make_student().assert_can_apply(make_internship(), StubAppReadPort(placement=True), TODAY)


def test_fourth_active_application_is_refused(make_student, make_internship):
    student = make_student()
    assert student.can_start_another_application(StubAppReadPort(active=2))
    assert not student.can_start_another_application(StubAppReadPort(active=3))
    with pytest.raises(NotEligibleError, match=r"cap reached \(3\)"):
        student.assert_can_apply(make_internship(), StubAppReadPort(active=3), TODAY)


def test_first_failing_rule_is_reported(make_student, make_internship):
    junior = make_student(year=2)
    advanced = make_internship(level=InternshipLevel.ADVANCED)
    with pytest.raises(NotEligibleError, match="level"):
        junior.assert_can_apply(advanced, StubAppReadPort(active=3, placement=True), TODAY)


def test_cannot_confirm_second_placement(make_student):
    student = make_student()
    student.assert_can_confirm_offer(StubAppReadPort())
    with pytest.raises(NotEligibleError):
        student.assert_can_confirm_offer(StubAppReadPort(placement=True))
