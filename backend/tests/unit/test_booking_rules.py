"""Pricing, clocks and storage-level overlap detection."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from tutordesk.core.clock import FixedClock, SystemClock
from tutordesk.core.exceptions import RepositoryException, ServiceException
from tutordesk.services.booking_service import price_for_duration
from tutordesk.services.conflict_checker import is_overlap_violation


@pytest.mark.parametrize(
    "minutes,rate,expected",
    [
        (120, Decimal("60.00"), Decimal("120.00")),
        (90, Decimal("60.00"), Decimal("90.00")),
        (50, Decimal("70.00"), Decimal("58.33")),
        (45, Decimal("55.50"), Decimal("41.63")),
    ],
)
def test_price_for_duration(minutes, rate, expected):
    assert price_for_duration(minutes, rate) == expected


def test_fixed_clock_drops_timezone():
    clock = FixedClock(datetime(2025, 3, 5, 10, 0))
    assert clock.today().isoformat() == "2025-03-05"
    assert clock.now().tzinfo is None


def test_system_clock_returns_naive_local_time():
    now = SystemClock("America/Sao_Paulo").now()
    assert now.tzinfo is None


def _integrity_error(orig):
    return IntegrityError("INSERT INTO lessons ...", {}, orig)


def test_exclusion_constraint_name_from_driver_diag():
    orig = Exception("conflicting key value violates exclusion constraint")
    orig.diag = SimpleNamespace(constraint_name="lessons_no_overlap")
    try:
        raise RepositoryException("create failed") from _integrity_error(orig)
    except RepositoryException as exc:
        assert is_overlap_violation(exc)


def test_exclusion_constraint_name_in_message():
    orig = Exception('violates exclusion constraint "lessons_no_overlap"')
    try:
        raise ServiceException("commit failed") from _integrity_error(orig)
    except ServiceException as exc:
        assert is_overlap_violation(exc)


def test_other_integrity_errors_are_not_conflicts():
    orig = Exception('violates foreign key constraint "lessons_student_id_fkey"')
    try:
        raise RepositoryException("create failed") from _integrity_error(orig)
    except RepositoryException as exc:
        assert not is_overlap_violation(exc)
