"""
Amortization schedule generator
Walks the lease term month by month, carrying the lease liability forward
"""

from typing import List, Optional, Tuple

from lease_ledger.lease_accounting.core.measurement import compute
from lease_ledger.lease_accounting.core.models import AmortizationRow, Lease, LeaseCalculation
from lease_ledger.lease_accounting.core.resolvers import payment_for_month, sublease_income_for_month
from lease_ledger.lease_accounting.utils.date_utils import month_date
from lease_ledger.lease_accounting.utils.finance import round_currency


def amortize_month(
    lease: Lease,
    calculation: LeaseCalculation,
    month: int,
    liability: float
) -> Tuple[AmortizationRow, float]:
    """
    Amortize one month (1-based) against the opening liability
    Returns the schedule row and the closing liability for the next month

    Interest accrues only in months with a payment; amortization applies every month.
    The final month amortizes the rounding remainder so the asset ends at zero.
    """
    payment = payment_for_month(lease, month - 1)
    interest = 0.0
    principal = 0.0
    closing = liability

    if payment > 0:
        interest = liability * lease.monthly_rate
        principal = payment - interest
        closing = liability - principal

    amortization = calculation.monthly_amortization
    rou_asset = calculation.initial_asset - amortization * month
    if month == calculation.lease_term:
        amortization = round_currency(calculation.initial_asset - amortization * (month - 1))
        rou_asset = 0.0

    row = AmortizationRow(
        month=month,
        date=month_date(lease.start_date, month - 1),
        payment=payment,
        opening_liability=liability,
        interest=interest,
        principal=principal,
        closing_liability=closing,
        amortization=amortization,
        rou_asset=rou_asset,
        sublease_income=sublease_income_for_month(lease, month - 1),
    )
    return row, closing


def generate_schedule(lease: Lease, calculation: Optional[LeaseCalculation] = None) -> List[AmortizationRow]:
    """
    Full amortization schedule, one row per month of the term

    Args:
        lease: Lease record
        calculation: Initial measurement, computed when not supplied
    Returns:
        Rows for months 1..lease_term in date order
    """
    if calculation is None:
        calculation = compute(lease)

    rows = []
    liability = calculation.initial_liability
    for month in range(1, calculation.lease_term + 1):
        row, liability = amortize_month(lease, calculation, month, liability)
        rows.append(row)

    return rows
