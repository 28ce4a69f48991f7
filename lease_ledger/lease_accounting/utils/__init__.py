"""
Utility functions for lease accounting
"""

from .date_utils import (
    lease_term_months,
    add_months,
    month_date,
    parse_date,
)

from .finance import (
    round_currency,
    present_value,
    net_present_value,
    calculate_rou_asset_value,
)

__all__ = [
    # Date utilities
    'lease_term_months',
    'add_months',
    'month_date',
    'parse_date',

    # Finance utilities
    'round_currency',
    'present_value',
    'net_present_value',
    'calculate_rou_asset_value',
]
