"""
Lease Ledger - ASC 842 lease accounting
"""
