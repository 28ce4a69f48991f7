"""
Data models for lease accounting system
Immutable lease records and the values derived from them
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple, Union

from lease_ledger.lease_accounting.utils.date_utils import month_start
from lease_ledger.lease_accounting.utils.finance import monthly_rate, round_currency


# ============ PAYMENT TERMS ============

@dataclass(frozen=True)
class FixedPayment:
    """Same cash payment every month of the term"""
    amount: float


@dataclass(frozen=True)
class DateBoundedPeriod:
    """Schedule period applying between two dates, both inclusive"""
    monthly_payment: float
    start_date: date
    end_date: date

    @property
    def sort_key(self) -> Tuple[int, date]:
        # Date-bounded periods sort after year-bounded ones
        return (1, self.start_date)

    def to_dict(self) -> dict:
        return {
            'monthly_payment': self.monthly_payment,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class YearBoundedPeriod:
    """Legacy schedule period: a calendar year, optionally narrowed to a month range"""
    monthly_payment: float
    year: int
    start_month: Optional[int] = None
    end_month: Optional[int] = None

    @property
    def sort_key(self) -> Tuple[int, date]:
        return (0, month_start(self.year, self.start_month))

    def covers_month(self, month: int) -> bool:
        """True when the month (1-12) falls inside start_month..end_month"""
        if self.start_month is not None and month < self.start_month:
            return False
        if self.end_month is not None and month > self.end_month:
            return False
        return True

    def to_dict(self) -> dict:
        return {
            'monthly_payment': self.monthly_payment,
            'year': self.year,
            'start_month': self.start_month,
            'end_month': self.end_month,
        }


SchedulePeriod = Union[DateBoundedPeriod, YearBoundedPeriod]


@dataclass(frozen=True)
class Scheduled:
    """Time-varying payments resolved month by month"""
    periods: Tuple[SchedulePeriod, ...] = ()


PaymentTerms = Union[FixedPayment, Scheduled]


# ============ LEASE ============

@dataclass(frozen=True)
class PreAdoptionPayment:
    """Historical payment made before ASC 842 adoption - informational only"""
    date: date
    amount: float
    description: str = ""

    def to_dict(self) -> dict:
        return {
            'date': self.date.isoformat(),
            'amount': self.amount,
            'description': self.description,
        }


@dataclass(frozen=True)
class Sublease:
    """Sub-tenant agreement producing monthly income"""
    sublessee_name: str
    start_date: date
    end_date: date
    monthly_income: Optional[float] = None
    # Reserved: accepted and stored, not used by the income math
    income_schedule: Tuple[SchedulePeriod, ...] = ()
    security_deposit: float = 0.0
    description: str = ""

    def is_active(self, on: date) -> bool:
        return self.start_date <= on <= self.end_date

    def to_dict(self) -> dict:
        return {
            'sublessee_name': self.sublessee_name,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'monthly_income': self.monthly_income,
            'income_schedule': [p.to_dict() for p in self.income_schedule],
            'security_deposit': self.security_deposit,
            'description': self.description,
        }


@dataclass(frozen=True)
class Lease:
    """Complete lease record - input to every calculation, never mutated"""

    name: str
    start_date: date
    end_date: date
    discount_rate: float
    payment_terms: Optional[PaymentTerms]

    # Initial asset adjustments
    prepaid_rent: float = 0.0
    initial_costs: float = 0.0
    incentives: float = 0.0

    # Informational
    pre_adoption_payments: Tuple[PreAdoptionPayment, ...] = ()
    adoption_date: Optional[date] = None

    subleases: Tuple[Sublease, ...] = ()

    # Record store identifiers
    lease_id: str = ""
    owner_id: Optional[int] = None

    @property
    def monthly_rate(self) -> float:
        return monthly_rate(self.discount_rate)

    @property
    def uses_schedule(self) -> bool:
        return isinstance(self.payment_terms, Scheduled)

    @property
    def pre_adoption_total(self) -> float:
        return round_currency(sum(p.amount for p in self.pre_adoption_payments))

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses"""
        data = {
            'lease_id': self.lease_id,
            'name': self.name,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'discount_rate': self.discount_rate,
            'prepaid_rent': self.prepaid_rent,
            'initial_costs': self.initial_costs,
            'incentives': self.incentives,
            'pre_adoption_payments': [p.to_dict() for p in self.pre_adoption_payments],
            'adoption_date': self.adoption_date.isoformat() if self.adoption_date else None,
            'subleases': [s.to_dict() for s in self.subleases],
        }
        if isinstance(self.payment_terms, FixedPayment):
            data['monthly_payment'] = self.payment_terms.amount
        elif isinstance(self.payment_terms, Scheduled):
            data['payment_schedule'] = [p.to_dict() for p in self.payment_terms.periods]
        return data


# ============ DERIVED VALUES ============

@dataclass(frozen=True)
class LeaseCalculation:
    """Initial measurement of a lease - recomputed on every request"""
    lease_term: int
    present_value: float
    initial_asset: float
    initial_liability: float
    monthly_amortization: float

    def to_dict(self) -> dict:
        return {
            'lease_term': self.lease_term,
            'present_value': self.present_value,
            'initial_asset': self.initial_asset,
            'initial_liability': self.initial_liability,
            'monthly_amortization': self.monthly_amortization,
        }


@dataclass(frozen=True)
class AmortizationRow:
    """One month of the amortization schedule"""
    month: int
    date: date
    payment: float = 0.0
    opening_liability: float = 0.0
    interest: float = 0.0
    principal: float = 0.0
    closing_liability: float = 0.0
    amortization: float = 0.0
    rou_asset: float = 0.0
    sublease_income: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization, amounts in cents"""
        return {
            'month': self.month,
            'date': self.date.isoformat(),
            'payment': self.payment,
            'opening_liability': round_currency(self.opening_liability),
            'interest': round_currency(self.interest),
            'principal': round_currency(self.principal),
            'closing_liability': round_currency(self.closing_liability),
            'amortization': self.amortization,
            'rou_asset': round_currency(self.rou_asset),
            'sublease_income': self.sublease_income,
        }


@dataclass(frozen=True)
class JournalLine:
    account: str
    amount: float

    def to_dict(self) -> dict:
        return {'account': self.account, 'amount': self.amount}


@dataclass(frozen=True)
class JournalEntry:
    """Balanced set of debit and credit postings for one accounting event"""
    lease_id: str
    date: date
    entry_type: str  # "initial" or "monthly"
    description: str
    debits: Tuple[JournalLine, ...] = field(default_factory=tuple)
    credits: Tuple[JournalLine, ...] = field(default_factory=tuple)

    @property
    def total_debits(self) -> float:
        return round_currency(sum(line.amount for line in self.debits))

    @property
    def total_credits(self) -> float:
        return round_currency(sum(line.amount for line in self.credits))

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses"""
        return {
            'lease_id': self.lease_id,
            'date': self.date.isoformat(),
            'type': self.entry_type,
            'description': self.description,
            'debits': [line.to_dict() for line in self.debits],
            'credits': [line.to_dict() for line in self.credits],
        }
