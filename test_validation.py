"""
Lease payload validation tests
"""
from datetime import date

import pytest

from conftest import LEASE_PAYLOAD
from lease_ledger.lease_accounting import InvalidInput, parse_lease
from lease_ledger.lease_accounting.core.models import (
    DateBoundedPeriod,
    FixedPayment,
    PreAdoptionPayment,
    Scheduled,
    YearBoundedPeriod,
)


def _paths(excinfo):
    return [issue['path'] for issue in excinfo.value.issues]


def test_fixed_payment_payload():
    lease = parse_lease(LEASE_PAYLOAD, lease_id=7, owner_id=3)

    assert lease.name == 'HQ Office'
    assert lease.start_date == date(2024, 1, 1)
    assert lease.end_date == date(2025, 1, 1)
    assert lease.payment_terms == FixedPayment(1000.0)
    assert lease.discount_rate == 0.06
    assert (lease.prepaid_rent, lease.initial_costs, lease.incentives) == (0.0, 0.0, 0.0)
    assert lease.lease_id == '7'
    assert lease.owner_id == 3


def test_camel_case_payload_is_accepted():
    lease = parse_lease({
        'name': 'Warehouse',
        'startDate': '2024-01-01',
        'endDate': '2026-01-01',
        'discountRate': 0.05,
        'paymentSchedule': [
            {'startDate': '2024-01-01', 'endDate': '2024-12-31', 'monthlyPayment': 900},
            {'year': 2025, 'monthlyPayment': 950, 'startMonth': 1, 'endMonth': 12},
        ],
        'prepaidRent': 100,
        'initialCosts': 200,
        'incentives': 50,
        'preASC842Payments': [{'date': '2023-06-01', 'amount': 400.5, 'description': 'Deposit'}],
        'asc842AdoptionDate': '2024-01-01',
        'subleases': [{
            'sublesseeName': 'Acme Ltd',
            'startDate': '2024-03-01',
            'endDate': '2024-09-30',
            'monthlyIncome': 150,
        }],
    })

    assert lease.payment_terms == Scheduled(periods=(
        DateBoundedPeriod(900.0, date(2024, 1, 1), date(2024, 12, 31)),
        YearBoundedPeriod(950.0, 2025, start_month=1, end_month=12),
    ))
    assert (lease.prepaid_rent, lease.initial_costs, lease.incentives) == (100.0, 200.0, 50.0)
    assert lease.pre_adoption_payments == (PreAdoptionPayment(date(2023, 6, 1), 400.5, 'Deposit'),)
    assert lease.pre_adoption_total == 400.5
    assert lease.adoption_date == date(2024, 1, 1)
    assert lease.subleases[0].sublessee_name == 'Acme Ltd'
    assert lease.subleases[0].monthly_income == 150.0


def test_schedule_period_with_dates_and_year_is_date_bounded():
    lease = parse_lease(dict(
        LEASE_PAYLOAD,
        monthly_payment=None,
        payment_schedule=[{'start_date': '2024-01-01', 'end_date': '2024-12-31', 'year': 2024, 'amount': 800}],
    ))

    assert lease.payment_terms == Scheduled(periods=(
        DateBoundedPeriod(800.0, date(2024, 1, 1), date(2024, 12, 31)),
    ))


def test_every_violation_is_reported():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease({})

    assert _paths(excinfo) == ['name', 'start_date', 'end_date', 'discount_rate', 'monthly_payment']
    assert str(excinfo.value).startswith('name: Lease name is required')


def test_end_date_must_follow_start_date():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(dict(LEASE_PAYLOAD, end_date='2024-01-01'))

    assert excinfo.value.issues == [{'path': 'end_date', 'message': 'End date must be after start date'}]


def test_discount_rate_range():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(dict(LEASE_PAYLOAD, discount_rate=1.5))
    assert _paths(excinfo) == ['discount_rate']

    assert parse_lease(dict(LEASE_PAYLOAD, discount_rate=0)).discount_rate == 0.0
    assert parse_lease(dict(LEASE_PAYLOAD, discount_rate=1)).discount_rate == 1.0


def test_monthly_payment_must_be_positive():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(dict(LEASE_PAYLOAD, monthly_payment=-10))

    assert excinfo.value.issues == [{'path': 'monthly_payment', 'message': 'Monthly payment must be positive'}]


def test_fixed_and_schedule_are_exclusive():
    payload = dict(LEASE_PAYLOAD, payment_schedule=[{'year': 2024, 'monthly_payment': 500}])

    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(payload)
    assert _paths(excinfo) == ['payment_schedule']


def test_empty_schedule_without_fixed_payment():
    payload = dict(LEASE_PAYLOAD, monthly_payment=None, payment_schedule=[])

    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(payload)
    assert _paths(excinfo) == ['monthly_payment']


def test_schedule_period_rules():
    payload = dict(LEASE_PAYLOAD, monthly_payment=None, payment_schedule=[
        {'monthly_payment': 500},
        {'year': 1999, 'monthly_payment': 500, 'start_month': 13},
        {'start_date': '2024-06-01', 'end_date': '2024-01-01', 'monthly_payment': 0},
        'not-a-period',
    ])

    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(payload)

    assert _paths(excinfo) == [
        'payment_schedule.0',
        'payment_schedule.1.year',
        'payment_schedule.1.start_month',
        'payment_schedule.2.monthly_payment',
        'payment_schedule.2.end_date',
        'payment_schedule.3',
    ]


def test_adjustments_must_not_be_negative():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(dict(LEASE_PAYLOAD, prepaid_rent=-1, incentives='abc'))

    assert _paths(excinfo) == ['prepaid_rent', 'incentives']


def test_sublease_rules():
    payload = dict(LEASE_PAYLOAD, subleases=[
        {'sublessee_name': 'Acme', 'start_date': '2024-02-01', 'end_date': '2024-08-01'},
        {'start_date': '2024-05-01', 'end_date': '2024-04-01', 'monthly_income': 100, 'security_deposit': -5},
    ])

    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(payload)

    assert _paths(excinfo) == [
        'subleases.0.monthly_income',
        'subleases.1.sublessee_name',
        'subleases.1.end_date',
        'subleases.1.security_deposit',
    ]


def test_sublease_with_income_schedule_only_is_valid():
    lease = parse_lease(dict(LEASE_PAYLOAD, subleases=[{
        'sublessee_name': 'Initech',
        'start_date': '2024-01-01',
        'end_date': '2024-12-31',
        'income_schedule': [{'year': 2024, 'monthly_payment': 300}],
    }]))

    assert lease.subleases[0].monthly_income is None
    assert lease.subleases[0].income_schedule == (YearBoundedPeriod(300.0, 2024),)


def test_pre_adoption_payment_rules():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(dict(LEASE_PAYLOAD, pre_adoption_payments=[{'amount': 0}]))

    assert _paths(excinfo) == ['pre_adoption_payments.0.date', 'pre_adoption_payments.0.amount']


def test_bad_dates_are_reported():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(dict(LEASE_PAYLOAD, start_date='01/02/2024'))

    assert excinfo.value.issues == [
        {'path': 'start_date', 'message': 'Start date must be an ISO date (YYYY-MM-DD)'},
    ]


def test_non_mapping_payload():
    with pytest.raises(InvalidInput) as excinfo:
        parse_lease(None)

    assert excinfo.value.to_dict() == {
        'error': 'Validation failed',
        'details': [{'path': '', 'message': 'Lease payload must be an object'}],
    }
