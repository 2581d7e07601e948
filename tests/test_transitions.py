import pytest

from api.exceptions import ForbiddenError, InvalidStateError
from orders.transitions import (
    ADMIN,
    AGENCY,
    CUSTOMER,
    ORDER_TRANSITIONS,
    SYSTEM,
    VENDOR,
    can_cancel_order,
    is_order_terminal,
    validate_agency_owns_job,
    validate_job_transition,
    validate_order_transition,
)


@pytest.mark.parametrize("current, target, actor", [
    ("PENDING", "CONFIRMED", VENDOR),
    ("CONFIRMED", "IN_TRANSIT", VENDOR),
    ("IN_TRANSIT", "DELIVERED", VENDOR),
    ("PENDING", "CANCELLED", CUSTOMER),
    ("CONFIRMED", "CANCELLED", CUSTOMER),
    ("DELIVERED", "COMPLETED", CUSTOMER),
    ("CONFIRMED", "IN_TRANSIT", AGENCY),
    ("IN_TRANSIT", "DELIVERED", AGENCY),
    ("DELIVERED", "COMPLETED", ADMIN),
    ("CONFIRMED", "CANCELLED", SYSTEM),
])
def test_allowed_transitions(current, target, actor):
    validate_order_transition(current, target, actor)


@pytest.mark.parametrize("current, target, actor", [
    ("DELIVERED", "CONFIRMED", VENDOR),
    ("PENDING", "CONFIRMED", CUSTOMER),
    ("PENDING", "IN_TRANSIT", VENDOR),
    ("DELIVERED", "COMPLETED", VENDOR),
    ("PENDING", "IN_TRANSIT", AGENCY),
    ("COMPLETED", "DELIVERED", ADMIN),
])
def test_illegal_transitions_are_invalid_state(current, target, actor):
    with pytest.raises(InvalidStateError):
        validate_order_transition(current, target, actor)


@pytest.mark.parametrize("current", ["IN_TRANSIT", "DELIVERED", "COMPLETED", "CANCELLED"])
def test_cancel_after_dispatch_is_forbidden(current):
    with pytest.raises(ForbiddenError) as exc:
        validate_order_transition(current, "CANCELLED", ADMIN)
    assert str(exc.value.detail) == f"Order cannot be cancelled once it is {current}"


def test_terminal_states_have_no_outgoing_transitions():
    for table in ORDER_TRANSITIONS.values():
        assert "COMPLETED" not in table
        assert "CANCELLED" not in table
    assert is_order_terminal("COMPLETED")
    assert is_order_terminal("CANCELLED")
    assert not is_order_terminal("DELIVERED")


def test_cancellable_states():
    assert can_cancel_order("PENDING")
    assert can_cancel_order("CONFIRMED")
    assert not can_cancel_order("IN_TRANSIT")


def test_job_transitions():
    validate_job_transition("OPEN", "ACCEPTED", AGENCY)
    validate_job_transition("ACCEPTED", "DELIVERED", AGENCY)
    validate_job_transition("ACCEPTED", "CANCELLED", SYSTEM)
    with pytest.raises(InvalidStateError):
        validate_job_transition("OPEN", "DELIVERED", AGENCY)
    with pytest.raises(InvalidStateError):
        validate_job_transition("DELIVERED", "CANCELLED", SYSTEM)


def test_agency_must_own_job():
    validate_agency_owns_job(3, 3)
    with pytest.raises(ForbiddenError) as exc:
        validate_agency_owns_job(3, 4)
    assert str(exc.value.detail) == "You can only update jobs assigned to your agency."
    with pytest.raises(ForbiddenError):
        validate_agency_owns_job(None, 4)
