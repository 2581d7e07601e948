"""
Allowed status transitions for orders and delivery jobs, per actor.

Each table maps actor -> current status -> set of statuses that actor may
move the entity to. Anything absent is rejected.
"""
from api.exceptions import ForbiddenError, InvalidStateError

VENDOR = 'vendor'
CUSTOMER = 'customer'
AGENCY = 'agency'
ADMIN = 'admin'
SYSTEM = 'system'

PENDING = 'PENDING'
CONFIRMED = 'CONFIRMED'
IN_TRANSIT = 'IN_TRANSIT'
DELIVERED = 'DELIVERED'
COMPLETED = 'COMPLETED'
CANCELLED = 'CANCELLED'

ORDER_TERMINAL = frozenset({COMPLETED, CANCELLED})
ORDER_CANCELLABLE = frozenset({PENDING, CONFIRMED})

ORDER_TRANSITIONS = {
    VENDOR: {
        PENDING: {CONFIRMED, CANCELLED},
        CONFIRMED: {IN_TRANSIT, CANCELLED},
        IN_TRANSIT: {DELIVERED},
    },
    CUSTOMER: {
        PENDING: {CANCELLED},
        CONFIRMED: {CANCELLED},
        DELIVERED: {COMPLETED},
    },
    AGENCY: {
        CONFIRMED: {IN_TRANSIT},
        IN_TRANSIT: {DELIVERED},
    },
    ADMIN: {
        PENDING: {CONFIRMED, CANCELLED},
        CONFIRMED: {IN_TRANSIT, CANCELLED},
        IN_TRANSIT: {DELIVERED},
        DELIVERED: {COMPLETED},
    },
    SYSTEM: {
        PENDING: {CANCELLED},
        CONFIRMED: {CANCELLED},
    },
}

JOB_OPEN = 'OPEN'
JOB_ACCEPTED = 'ACCEPTED'
JOB_DELIVERED = 'DELIVERED'
JOB_CANCELLED = 'CANCELLED'

JOB_TRANSITIONS = {
    AGENCY: {
        JOB_OPEN: {JOB_ACCEPTED},
        JOB_ACCEPTED: {JOB_DELIVERED},
    },
    SYSTEM: {
        JOB_OPEN: {JOB_CANCELLED},
        JOB_ACCEPTED: {JOB_CANCELLED},
    },
    ADMIN: {
        JOB_OPEN: {JOB_ACCEPTED, JOB_CANCELLED},
        JOB_ACCEPTED: {JOB_DELIVERED, JOB_CANCELLED},
    },
}


def can_transition(table, actor, current, target):
    return target in table.get(actor, {}).get(current, set())


def can_cancel_order(status):
    return status in ORDER_CANCELLABLE


def is_order_terminal(status):
    return status in ORDER_TERMINAL


def validate_order_transition(current, target, actor):
    if target == CANCELLED and not can_cancel_order(current):
        raise ForbiddenError(f"Order cannot be cancelled once it is {current}")
    if not can_transition(ORDER_TRANSITIONS, actor, current, target):
        raise InvalidStateError(f"Cannot move order from {current} to {target} as {actor}")


def validate_job_transition(current, target, actor):
    if not can_transition(JOB_TRANSITIONS, actor, current, target):
        raise InvalidStateError(f"Cannot move delivery job from {current} to {target} as {actor}")


def validate_agency_owns_job(job_agency_id, agency_id):
    if job_agency_id != agency_id:
        raise ForbiddenError("You can only update jobs assigned to your agency.")
