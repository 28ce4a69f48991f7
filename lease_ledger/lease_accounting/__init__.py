"""
Lease accounting engine
Pure calculations over an in-memory lease record: measurement, schedule and journal entries
"""

from typing import List

from .core.errors import InvalidInput, LeaseAccountingError
from .core.measurement import compute, sublease_income_total
from .core.models import JournalEntry, Lease, LeaseCalculation
from .core.resolvers import payment_for_month, sublease_income_for_month
from .core.validation import parse_lease
from .schedule.generator import generate_schedule
from .utils.date_utils import lease_term_months
from .utils.journal_generator import JournalGenerator, initial_entry, monthly_entries


def journal_entries(lease: Lease) -> List[JournalEntry]:
    """Initial recognition entry followed by the monthly entries"""
    return JournalGenerator().generate_journals(lease)


__all__ = [
    'InvalidInput',
    'LeaseAccountingError',
    'Lease',
    'LeaseCalculation',
    'JournalEntry',
    'JournalGenerator',
    'compute',
    'initial_entry',
    'monthly_entries',
    'journal_entries',
    'sublease_income_total',
    'payment_for_month',
    'sublease_income_for_month',
    'generate_schedule',
    'lease_term_months',
    'parse_lease',
]
