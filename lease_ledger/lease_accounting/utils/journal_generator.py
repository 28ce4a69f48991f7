"""
Journal Entry Generator
Creates balanced double-entry postings from a lease and its amortization schedule
"""

from typing import Dict, List, Optional

from lease_ledger.lease_accounting.core.measurement import compute
from lease_ledger.lease_accounting.core.models import (
    AmortizationRow,
    JournalEntry,
    JournalLine,
    Lease,
    LeaseCalculation,
)
from lease_ledger.lease_accounting.schedule.generator import generate_schedule
from lease_ledger.lease_accounting.utils.finance import round_currency

RIGHT_OF_USE_ASSET = "Right-of-Use Asset"
LEASE_LIABILITY = "Lease Liability"
INTEREST_EXPENSE = "Interest Expense"
CASH = "Cash"
AMORTIZATION_EXPENSE = "Amortization Expense"
ACCUMULATED_AMORTIZATION = "Accumulated Amortization"
SUBLEASE_INCOME = "Sublease Income"
PREPAID_RENT = "Prepaid Rent"
LEASE_INCENTIVE_RECEIVABLE = "Lease Incentive Receivable"


class JournalGenerator:
    """
    Generate journal entries for a lease
    Holds no state between calls: every method is a function of the lease passed in
    """

    def generate_journals(self, lease: Lease) -> List[JournalEntry]:
        """Initial recognition entry followed by every monthly entry"""
        calculation = compute(lease)
        return [self.initial_entry(lease, calculation)] + self.monthly_entries(lease, calculation)

    def initial_entry(self, lease: Lease, calculation: Optional[LeaseCalculation] = None) -> JournalEntry:
        """Recognize the right-of-use asset against the lease liability at lease start"""
        if calculation is None:
            calculation = compute(lease)

        initial_costs = round_currency(lease.initial_costs)
        prepaid_rent = round_currency(lease.prepaid_rent)
        incentives = round_currency(lease.incentives)
        # Asset line is built from the posted amounts; equals initial_asset for cent-precision inputs
        asset = round_currency(calculation.initial_liability + initial_costs + prepaid_rent - incentives)

        debits = [JournalLine(RIGHT_OF_USE_ASSET, asset)]
        if incentives:
            debits.append(JournalLine(LEASE_INCENTIVE_RECEIVABLE, incentives))

        credits = [JournalLine(LEASE_LIABILITY, calculation.initial_liability)]
        if initial_costs:
            credits.append(JournalLine(CASH, initial_costs))
        if prepaid_rent:
            credits.append(JournalLine(PREPAID_RENT, prepaid_rent))

        return JournalEntry(
            lease_id=lease.lease_id,
            date=lease.start_date,
            entry_type="initial",
            description=f"Initial recognition: {lease.name}",
            debits=tuple(debits),
            credits=tuple(credits),
        )

    def monthly_entries(self, lease: Lease, calculation: Optional[LeaseCalculation] = None) -> List[JournalEntry]:
        """
        Monthly entries in date order
        Per month: payment and interest (months with a payment), asset amortization,
        then sublease income (months with income)
        """
        if calculation is None:
            calculation = compute(lease)

        entries = []
        for row in generate_schedule(lease, calculation):
            entries.extend(self._entries_for_row(lease, row))
        return entries

    def _entries_for_row(self, lease: Lease, row: AmortizationRow) -> List[JournalEntry]:
        entries = []

        if row.payment > 0:
            interest = round_currency(row.interest)
            # Principal takes the remainder so the entry balances to the cent
            principal = round_currency(row.payment - interest)
            entries.append(self._monthly(
                lease, row, "Payment and interest",
                debits=(JournalLine(INTEREST_EXPENSE, interest), JournalLine(LEASE_LIABILITY, principal)),
                credits=(JournalLine(CASH, row.payment),),
            ))

        entries.append(self._monthly(
            lease, row, "Asset amortization",
            debits=(JournalLine(AMORTIZATION_EXPENSE, row.amortization),),
            credits=(JournalLine(ACCUMULATED_AMORTIZATION, row.amortization),),
        ))

        if row.sublease_income > 0:
            income = round_currency(row.sublease_income)
            entries.append(self._monthly(
                lease, row, "Sublease income",
                debits=(JournalLine(CASH, income),),
                credits=(JournalLine(SUBLEASE_INCOME, income),),
            ))

        return entries

    @staticmethod
    def _monthly(lease: Lease, row: AmortizationRow, label: str, debits, credits) -> JournalEntry:
        return JournalEntry(
            lease_id=lease.lease_id,
            date=row.date,
            entry_type="monthly",
            description=f"Month {row.month} - {label}",
            debits=debits,
            credits=credits,
        )

    @staticmethod
    def verify_balance(entries: List[JournalEntry]) -> bool:
        """Verify that every entry balances (debits = credits) to the cent"""
        return all(entry.is_balanced for entry in entries)

    @staticmethod
    def get_debit_credit_summary(entries: List[JournalEntry]) -> Dict[str, float]:
        """Get summary of debits and credits across entries"""
        debits = round_currency(sum((e.total_debits for e in entries), 0.0))
        credits = round_currency(sum((e.total_credits for e in entries), 0.0))
        difference = round_currency(debits - credits)

        return {
            'total_debits': debits,
            'total_credits': credits,
            'difference': difference,
            'is_balanced': difference == 0,
        }


def initial_entry(lease: Lease) -> JournalEntry:
    return JournalGenerator().initial_entry(lease)


def monthly_entries(lease: Lease) -> List[JournalEntry]:
    return JournalGenerator().monthly_entries(lease)
