"""
Financial calculation utilities
Present value math and cent rounding for lease measurement
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal('0.01')


def round_currency(amount: float) -> float:
    """
    Round an amount to cents, half away from zero
    Goes through the shortest float repr so 2.675 rounds to 2.68, not 2.67
    """
    return float(Decimal(repr(amount)).quantize(CENT, rounding=ROUND_HALF_UP))


def monthly_rate(annual_rate: float) -> float:
    """Periodic rate for a nominal annual rate compounded monthly"""
    return annual_rate / 12


def present_value(rate: float, nper: int, pmt: float) -> float:
    """
    Present value of an ordinary annuity (payments at period end)
    Same math as Excel PV() with type=0, returned as a positive amount

    Args:
        rate: Interest rate per period
        nper: Number of periods
        pmt: Payment per period
    Returns:
        Present value, unrounded
    """
    if rate == 0:
        return pmt * nper

    return pmt * (1 - (1 + rate) ** -nper) / rate


def net_present_value(rate: float, values: Iterable[float]) -> float:
    """
    Calculate net present value
    Ports Excel NPV(): the first value is discounted one full period

    Args:
        rate: Discount rate per period
        values: Cash flows, one per period
    Returns:
        Net present value, unrounded
    """
    if rate == 0:
        return sum(values)

    npv = 0.0
    for i, value in enumerate(values):
        npv += value / ((1 + rate) ** (i + 1))

    return npv


def calculate_rou_asset_value(present_value_lease_liability: float, initial_direct_costs: float = 0.0,
                              prepaid_rent: float = 0.0, lease_incentives: float = 0.0) -> float:
    """
    Calculate Right-of-Use asset value
    ROU Asset = PV of Lease Liability + Initial Direct Costs + Prepaid Rent - Lease Incentives
    """
    return present_value_lease_liability + initial_direct_costs + prepaid_rent - lease_incentives


def straight_line_amount(value: float, periods: int) -> float:
    """Equal per-period share of a value"""
    if periods <= 0:
        raise ValueError(f"Straight-line amortization needs at least one period, got {periods}")
    return value / periods
