"""
Lease input validation
Gate run once at the system boundary: turns a JSON-style payload into a Lease
or raises InvalidInput listing every violated constraint
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from lease_ledger.lease_accounting.core.errors import InvalidInput
from lease_ledger.lease_accounting.core.models import (
    DateBoundedPeriod,
    FixedPayment,
    Lease,
    PaymentTerms,
    PreAdoptionPayment,
    Scheduled,
    SchedulePeriod,
    Sublease,
    YearBoundedPeriod,
)
from lease_ledger.lease_accounting.utils.date_utils import parse_date

logger = logging.getLogger(__name__)

MIN_SCHEDULE_YEAR = 2000
MAX_SCHEDULE_YEAR = 2100


class _Issues:
    """Collects violations so the caller sees all of them at once"""

    def __init__(self):
        self.items: List[Dict[str, str]] = []

    def add(self, path: str, message: str):
        self.items.append({'path': path, 'message': message})

    def __bool__(self):
        return bool(self.items)


def _get(payload: Mapping, *keys: str) -> Any:
    """First non-None value among snake_case key and its aliases"""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _number(value: Any) -> Optional[float]:
    if value is None or value == '' or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _integer(value: Any) -> Optional[int]:
    number = _number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def _date_field(payload: Mapping, issues: _Issues, path: str, label: str, *keys: str, required: bool = True):
    raw = _get(payload, *keys)
    if raw is None or raw == '':
        if required:
            issues.add(path, f'{label} is required')
        return None
    parsed = parse_date(raw)
    if parsed is None:
        issues.add(path, f'{label} must be an ISO date (YYYY-MM-DD)')
    return parsed


def _positive(payload: Mapping, issues: _Issues, path: str, label: str, *keys: str) -> Optional[float]:
    raw = _get(payload, *keys)
    if raw is None:
        return None
    value = _number(raw)
    if value is None or value <= 0:
        issues.add(path, f'{label} must be positive')
        return None
    return value


def _non_negative(payload: Mapping, issues: _Issues, path: str, label: str, *keys: str) -> float:
    raw = _get(payload, *keys)
    if raw is None or raw == '':
        return 0.0
    value = _number(raw)
    if value is None or value < 0:
        issues.add(path, f'{label} must be zero or more')
        return 0.0
    return value


def _list_field(payload: Mapping, issues: _Issues, path: str, *keys: str) -> List[Any]:
    raw = _get(payload, *keys)
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        issues.add(path, 'Must be a list')
        return []
    return list(raw)


# ============ PAYMENT SCHEDULE ============

def _parse_period(item: Any, path: str, issues: _Issues) -> Optional[SchedulePeriod]:
    if not isinstance(item, Mapping):
        issues.add(path, 'Schedule period must be an object')
        return None

    amount = _positive(item, issues, f'{path}.monthly_payment', 'Monthly payment',
                       'monthly_payment', 'monthlyPayment', 'amount')
    if amount is None and _get(item, 'monthly_payment', 'monthlyPayment', 'amount') is None:
        issues.add(f'{path}.monthly_payment', 'Monthly payment is required')

    has_start = _get(item, 'start_date', 'startDate') not in (None, '')
    has_end = _get(item, 'end_date', 'endDate') not in (None, '')
    year_raw = _get(item, 'year')

    if has_start and has_end:
        start_date = _date_field(item, issues, f'{path}.start_date', 'Start date', 'start_date', 'startDate')
        end_date = _date_field(item, issues, f'{path}.end_date', 'End date', 'end_date', 'endDate')
        if start_date and end_date and end_date <= start_date:
            issues.add(f'{path}.end_date', 'End date must be after start date')
        if amount is None or start_date is None or end_date is None:
            return None
        return DateBoundedPeriod(monthly_payment=amount, start_date=start_date, end_date=end_date)

    if year_raw is not None:
        year = _integer(year_raw)
        if year is None or not MIN_SCHEDULE_YEAR <= year <= MAX_SCHEDULE_YEAR:
            issues.add(f'{path}.year', f'Year must be an integer between {MIN_SCHEDULE_YEAR} and {MAX_SCHEDULE_YEAR}')
            year = None
        months = []
        for key, alias, label in (('start_month', 'startMonth', 'Start month'), ('end_month', 'endMonth', 'End month')):
            raw = _get(item, key, alias)
            if raw is None:
                months.append(None)
                continue
            month = _integer(raw)
            if month is None or not 1 <= month <= 12:
                issues.add(f'{path}.{key}', f'{label} must be between 1 and 12')
                month = None
            months.append(month)
        if amount is None or year is None:
            return None
        return YearBoundedPeriod(monthly_payment=amount, year=year, start_month=months[0], end_month=months[1])

    issues.add(path, 'Schedule period needs both start and end dates, or a year')
    return None


def _parse_periods(items: List[Any], path: str, issues: _Issues) -> Tuple[SchedulePeriod, ...]:
    periods = (_parse_period(item, f'{path}.{i}', issues) for i, item in enumerate(items))
    return tuple(p for p in periods if p is not None)


def _parse_payment_terms(payload: Mapping, issues: _Issues) -> Optional[PaymentTerms]:
    amount = _positive(payload, issues, 'monthly_payment', 'Monthly payment', 'monthly_payment', 'monthlyPayment')
    schedule_items = _list_field(payload, issues, 'payment_schedule', 'payment_schedule', 'paymentSchedule')

    if amount is not None and schedule_items:
        issues.add('payment_schedule', 'Provide either a monthly payment or a payment schedule, not both')
        return None
    if schedule_items:
        return Scheduled(periods=_parse_periods(schedule_items, 'payment_schedule', issues))
    if amount is not None:
        return FixedPayment(amount=amount)

    if _get(payload, 'monthly_payment', 'monthlyPayment') is None:
        issues.add('monthly_payment', 'Either monthly payment or payment schedule must be provided')
    return None


# ============ INFORMATIONAL & SUBLEASES ============

def _parse_pre_adoption_payment(item: Any, path: str, issues: _Issues) -> Optional[PreAdoptionPayment]:
    if not isinstance(item, Mapping):
        issues.add(path, 'Payment must be an object')
        return None
    paid_on = _date_field(item, issues, f'{path}.date', 'Payment date', 'date')
    amount = _positive(item, issues, f'{path}.amount', 'Payment amount', 'amount')
    if amount is None and _get(item, 'amount') is None:
        issues.add(f'{path}.amount', 'Payment amount is required')
    if paid_on is None or amount is None:
        return None
    return PreAdoptionPayment(date=paid_on, amount=amount, description=_text(item.get('description')))


def _parse_sublease(item: Any, path: str, issues: _Issues) -> Optional[Sublease]:
    if not isinstance(item, Mapping):
        issues.add(path, 'Sublease must be an object')
        return None

    name = _text(_get(item, 'sublessee_name', 'sublesseeName'))
    if not name:
        issues.add(f'{path}.sublessee_name', 'Sublessee name is required')
    start_date = _date_field(item, issues, f'{path}.start_date', 'Sublease start date', 'start_date', 'startDate')
    end_date = _date_field(item, issues, f'{path}.end_date', 'Sublease end date', 'end_date', 'endDate')
    if start_date and end_date and end_date <= start_date:
        issues.add(f'{path}.end_date', 'Sublease end date must be after start date')

    monthly_income = _positive(item, issues, f'{path}.monthly_income', 'Monthly income',
                               'monthly_income', 'monthlyIncome')
    schedule_items = _list_field(item, issues, f'{path}.income_schedule', 'income_schedule', 'incomeSchedule')
    income_schedule = _parse_periods(schedule_items, f'{path}.income_schedule', issues)
    if monthly_income is None and not schedule_items and _get(item, 'monthly_income', 'monthlyIncome') is None:
        issues.add(f'{path}.monthly_income', 'Either monthly income or income schedule must be provided')

    security_deposit = _non_negative(item, issues, f'{path}.security_deposit', 'Security deposit',
                                     'security_deposit', 'securityDeposit')

    if not name or start_date is None or end_date is None:
        return None
    return Sublease(
        sublessee_name=name,
        start_date=start_date,
        end_date=end_date,
        monthly_income=monthly_income,
        income_schedule=income_schedule,
        security_deposit=security_deposit,
        description=_text(item.get('description')),
    )


# ============ LEASE ============

def parse_lease(payload: Any, lease_id: str = "", owner_id: Optional[int] = None) -> Lease:
    """
    Validate a lease payload and build the immutable Lease record

    Args:
        payload: Mapping with snake_case keys (camelCase aliases accepted)
        lease_id: Record store identifier, if the lease is stored
        owner_id: Owning user, if known
    Returns:
        Lease ready for the calculation engine
    Raises:
        InvalidInput: with every violated constraint
    """
    if not isinstance(payload, Mapping):
        raise InvalidInput.single('', 'Lease payload must be an object')

    issues = _Issues()

    name = _text(_get(payload, 'name', 'agreement_title'))
    if not name:
        issues.add('name', 'Lease name is required')

    start_date = _date_field(payload, issues, 'start_date', 'Start date', 'start_date', 'startDate', 'lease_start_date')
    end_date = _date_field(payload, issues, 'end_date', 'End date', 'end_date', 'endDate', 'lease_end_date')
    if start_date and end_date and end_date <= start_date:
        issues.add('end_date', 'End date must be after start date')

    discount_rate = _number(_get(payload, 'discount_rate', 'discountRate'))
    if discount_rate is None:
        issues.add('discount_rate', 'Discount rate is required')
    elif not 0 <= discount_rate <= 1:
        issues.add('discount_rate', 'Discount rate must be between 0 and 1')

    payment_terms = _parse_payment_terms(payload, issues)

    prepaid_rent = _non_negative(payload, issues, 'prepaid_rent', 'Prepaid rent', 'prepaid_rent', 'prepaidRent')
    initial_costs = _non_negative(payload, issues, 'initial_costs', 'Initial costs', 'initial_costs', 'initialCosts')
    incentives = _non_negative(payload, issues, 'incentives', 'Incentives', 'incentives')

    pre_adoption_items = _list_field(payload, issues, 'pre_adoption_payments',
                                     'pre_adoption_payments', 'preASC842Payments')
    pre_adoption_payments = tuple(
        p for p in (_parse_pre_adoption_payment(item, f'pre_adoption_payments.{i}', issues)
                    for i, item in enumerate(pre_adoption_items))
        if p is not None
    )
    adoption_date = _date_field(payload, issues, 'adoption_date', 'Adoption date',
                                'adoption_date', 'asc842AdoptionDate', required=False)

    sublease_items = _list_field(payload, issues, 'subleases', 'subleases')
    subleases = tuple(
        s for s in (_parse_sublease(item, f'subleases.{i}', issues) for i, item in enumerate(sublease_items))
        if s is not None
    )

    if issues:
        logger.debug(f"Lease payload rejected with {len(issues.items)} issue(s)")
        raise InvalidInput(issues.items)

    return Lease(
        name=name,
        start_date=start_date,
        end_date=end_date,
        discount_rate=discount_rate,
        payment_terms=payment_terms,
        prepaid_rent=prepaid_rent,
        initial_costs=initial_costs,
        incentives=incentives,
        pre_adoption_payments=pre_adoption_payments,
        adoption_date=adoption_date,
        subleases=subleases,
        lease_id=str(lease_id) if lease_id is not None else "",
        owner_id=owner_id,
    )
