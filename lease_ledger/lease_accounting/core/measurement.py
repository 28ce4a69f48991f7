"""
Lease measurement
Present value of the payment stream and the initial balances derived from it
"""

import logging

from lease_ledger.lease_accounting.core.errors import InvalidInput
from lease_ledger.lease_accounting.core.models import FixedPayment, Lease, LeaseCalculation, Scheduled
from lease_ledger.lease_accounting.core.resolvers import payment_for_month, sublease_income_for_month
from lease_ledger.lease_accounting.utils.date_utils import lease_term_months
from lease_ledger.lease_accounting.utils.finance import (
    calculate_rou_asset_value,
    net_present_value,
    present_value,
    round_currency,
    straight_line_amount,
)

logger = logging.getLogger(__name__)


def lease_present_value(lease: Lease, lease_term: int) -> float:
    """
    Present value of the lease payments, rounded to cents
    Fixed terms use the ordinary annuity closed form, schedules are discounted month by month
    """
    terms = lease.payment_terms
    rate = lease.monthly_rate

    if isinstance(terms, FixedPayment):
        return round_currency(present_value(rate, lease_term, terms.amount))

    if isinstance(terms, Scheduled) and terms.periods:
        payments = [payment_for_month(lease, m) for m in range(lease_term)]
        return round_currency(net_present_value(rate, payments))

    raise InvalidInput.single('monthly_payment', 'Either monthly payment or payment schedule must be provided')


def compute(lease: Lease) -> LeaseCalculation:
    """
    Initial measurement of a lease

    Liability is the present value of payments; the right-of-use asset adds
    initial direct costs and prepaid rent and removes incentives; the asset is
    amortized straight-line over the term.
    """
    lease_term = lease_term_months(lease.start_date, lease.end_date)
    if lease_term <= 0:
        raise InvalidInput.single('end_date', 'Lease term must be at least one month')

    pv = lease_present_value(lease, lease_term)
    initial_asset = calculate_rou_asset_value(pv, lease.initial_costs, lease.prepaid_rent, lease.incentives)

    calculation = LeaseCalculation(
        lease_term=lease_term,
        present_value=pv,
        initial_asset=round_currency(initial_asset),
        initial_liability=pv,
        monthly_amortization=round_currency(straight_line_amount(initial_asset, lease_term)),
    )
    logger.debug(
        f"Measured lease '{lease.lease_id or lease.name}': term={lease_term}, "
        f"pv={calculation.present_value:,.2f}, asset={calculation.initial_asset:,.2f}"
    )
    return calculation


def sublease_income_total(lease: Lease) -> float:
    """Sublease income summed over every month of the term"""
    lease_term = lease_term_months(lease.start_date, lease.end_date)
    total = sum((sublease_income_for_month(lease, m) for m in range(lease_term)), 0.0)
    return round_currency(total)
