"""
Errors raised by the lease accounting core
"""

from typing import Dict, List, Optional


class LeaseAccountingError(Exception):
    """Base class for lease accounting failures"""


class InvalidInput(LeaseAccountingError):
    """
    Lease record fails one or more input constraints
    issues holds every violation as {"path": ..., "message": ...}
    """

    def __init__(self, issues: List[Dict[str, str]]):
        self.issues = list(issues)
        summary = '; '.join(f"{i['path']}: {i['message']}" for i in self.issues)
        super().__init__(summary or 'Invalid lease input')

    @classmethod
    def single(cls, path: str, message: str) -> 'InvalidInput':
        return cls([{'path': path, 'message': message}])

    def to_dict(self, error: Optional[str] = 'Validation failed') -> dict:
        return {'error': error, 'details': self.issues}
