"""
Payment and sublease income resolution tests
"""
from datetime import date

import pytest

from conftest import make_lease, scheduled
from lease_ledger.lease_accounting import (
    InvalidInput,
    payment_for_month,
    sublease_income_for_month,
    sublease_income_total,
)
from lease_ledger.lease_accounting.core.models import (
    DateBoundedPeriod,
    FixedPayment,
    Scheduled,
    Sublease,
    YearBoundedPeriod,
)
from lease_ledger.lease_accounting.utils.date_utils import add_months, parse_date


def test_fixed_payment_applies_to_every_month():
    lease = make_lease(FixedPayment(2500.0))

    assert [payment_for_month(lease, m) for m in (0, 5, 11, 400)] == [2500.0] * 4


def test_year_bounded_month_range_is_explicit_zero():
    lease = make_lease(scheduled(YearBoundedPeriod(500.0, 2024, start_month=6)))

    payments = [payment_for_month(lease, m) for m in range(12)]

    assert payments[:5] == [0.0] * 5
    assert payments[5:] == [500.0] * 7


def test_year_bounded_end_month():
    lease = make_lease(scheduled(YearBoundedPeriod(750.0, 2024, start_month=3, end_month=4)))

    payments = [payment_for_month(lease, m) for m in range(12)]

    assert payments == [0.0, 0.0, 750.0, 750.0] + [0.0] * 8


def test_explicit_zero_stops_the_scan():
    lease = make_lease(scheduled(
        YearBoundedPeriod(500.0, 2024, start_month=6),
        DateBoundedPeriod(700.0, date(2024, 1, 1), date(2024, 12, 31)),
    ))

    assert payment_for_month(lease, 0) == 0.0
    assert payment_for_month(lease, 6) == 500.0


def test_declaration_order_wins_on_overlap():
    lease = make_lease(scheduled(
        DateBoundedPeriod(700.0, date(2024, 1, 1), date(2024, 12, 31)),
        YearBoundedPeriod(500.0, 2024, start_month=6),
    ))

    assert payment_for_month(lease, 0) == 700.0
    assert payment_for_month(lease, 6) == 700.0


def test_date_bounds_are_inclusive():
    lease = make_lease(scheduled(
        DateBoundedPeriod(100.0, date(2024, 1, 1), date(2024, 3, 1)),
        DateBoundedPeriod(200.0, date(2024, 3, 1), date(2024, 12, 31)),
    ))

    assert payment_for_month(lease, 2) == 100.0
    assert payment_for_month(lease, 3) == 200.0


def test_uncovered_months_fall_back_to_last_period():
    lease = make_lease(scheduled(
        DateBoundedPeriod(1200.0, date(2024, 7, 1), date(2024, 9, 30)),
        DateBoundedPeriod(1000.0, date(2024, 1, 1), date(2024, 6, 30)),
    ))

    assert payment_for_month(lease, 0) == 1000.0
    assert payment_for_month(lease, 8) == 1200.0
    # October onwards: no period matches, the latest-starting period applies
    assert [payment_for_month(lease, m) for m in (9, 10, 11)] == [1200.0] * 3


def test_fallback_sorts_date_bounded_after_year_bounded():
    lease = make_lease(
        scheduled(
            YearBoundedPeriod(800.0, 2030),
            DateBoundedPeriod(900.0, date(2024, 1, 1), date(2024, 3, 31)),
        ),
        end=date(2024, 7, 1),
    )

    assert payment_for_month(lease, 0) == 900.0
    assert payment_for_month(lease, 4) == 900.0


def test_fallback_between_year_bounded_periods():
    lease = make_lease(
        scheduled(YearBoundedPeriod(600.0, 2026), YearBoundedPeriod(400.0, 2023)),
        start=date(2024, 1, 1),
        end=date(2025, 1, 1),
    )

    assert payment_for_month(lease, 0) == 600.0


def test_empty_schedule_is_invalid_input():
    lease = make_lease(Scheduled(periods=()))

    with pytest.raises(InvalidInput):
        payment_for_month(lease, 0)


def test_payment_resolution_is_deterministic():
    lease = make_lease(scheduled(YearBoundedPeriod(500.0, 2024, start_month=6)))

    assert [payment_for_month(lease, m) for m in range(12)] == [payment_for_month(lease, m) for m in range(12)]


def test_month_dates_clamp_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 1, 31), 2) == date(2024, 3, 31)


def test_parse_date_accepts_iso_strings():
    assert parse_date('2024-03-05') == date(2024, 3, 5)
    assert parse_date('2024-03-05T00:00:00.000Z') == date(2024, 3, 5)
    assert parse_date(date(2024, 3, 5)) == date(2024, 3, 5)
    assert parse_date('') is None
    assert parse_date('not a date') is None


SUBLEASES = (
    Sublease('Acme Ltd', date(2024, 3, 1), date(2024, 6, 1), monthly_income=200.0),
    Sublease('Globex', date(2024, 5, 1), date(2024, 12, 31), monthly_income=100.0),
)


def test_sublease_income_sums_active_subleases():
    lease = make_lease(subleases=SUBLEASES)

    income = [sublease_income_for_month(lease, m) for m in range(12)]

    assert income == [0.0, 0.0, 200.0, 200.0, 300.0, 300.0] + [100.0] * 6


def test_sublease_income_total_over_term():
    assert sublease_income_total(make_lease(subleases=SUBLEASES)) == 1600.0


def test_no_subleases_means_no_income():
    lease = make_lease()

    assert sublease_income_for_month(lease, 3) == 0.0
    assert sublease_income_total(lease) == 0


def test_schedule_only_sublease_contributes_no_income():
    sublease = Sublease(
        'Initech', date(2024, 1, 1), date(2024, 12, 31),
        income_schedule=(YearBoundedPeriod(300.0, 2024),),
    )

    assert sublease_income_total(make_lease(subleases=(sublease,))) == 0.0
