"""
Month-level cash flow resolution
Cash payment due and sublease income received for a month offset within the lease
"""

from typing import Sequence

from lease_ledger.lease_accounting.core.errors import InvalidInput
from lease_ledger.lease_accounting.core.models import (
    DateBoundedPeriod,
    FixedPayment,
    Lease,
    Scheduled,
    SchedulePeriod,
)
from lease_ledger.lease_accounting.utils.date_utils import month_date


def _last_period(periods: Sequence[SchedulePeriod]) -> SchedulePeriod:
    """Chronologically last period; year-bounded periods sort before date-bounded ones"""
    return sorted(periods, key=lambda p: p.sort_key)[-1]


def payment_for_month(lease: Lease, month_index: int) -> float:
    """
    Cash payment due in the month at 0-based offset month_index

    Fixed terms pay the same amount every month. Scheduled terms take the first
    period covering the month; a year-bounded period whose year matches but whose
    month range does not is an explicit zero. When nothing covers the month the
    chronologically last period's amount applies.
    """
    terms = lease.payment_terms
    if isinstance(terms, FixedPayment):
        return terms.amount
    if not isinstance(terms, Scheduled) or not terms.periods:
        raise InvalidInput.single('monthly_payment', 'Either monthly payment or payment schedule must be provided')

    current = month_date(lease.start_date, month_index)
    for period in terms.periods:
        if isinstance(period, DateBoundedPeriod):
            if period.start_date <= current <= period.end_date:
                return period.monthly_payment
        elif current.year == period.year:
            if period.covers_month(current.month):
                return period.monthly_payment
            return 0.0

    return _last_period(terms.periods).monthly_payment


def sublease_income_for_month(lease: Lease, month_index: int) -> float:
    """Total sublease income for the month at 0-based offset month_index"""
    if not lease.subleases:
        return 0.0

    current = month_date(lease.start_date, month_index)
    return sum(
        ((s.monthly_income or 0.0) for s in lease.subleases if s.is_active(current)),
        0.0,
    )
