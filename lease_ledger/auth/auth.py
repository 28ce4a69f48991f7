"""
Authentication Utilities
Bearer token identity for API routes
"""

from functools import wraps
from typing import Optional
from flask import g, jsonify, request
import logging

from lease_ledger import database

logger = logging.getLogger(__name__)


def bearer_token() -> Optional[str]:
    """Token from an 'Authorization: Bearer <token>' header"""
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    return header[len('Bearer '):].strip() or None


def require_login(f):
    """
    Decorator to require authentication
    Resolves the bearer token to its owner and stores it on g.user_id
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user_id = database.resolve_token(bearer_token())
        if user_id is None:
            logger.warning(f"❌ Unauthorized access attempt: {request.method} {request.path}")
            return jsonify({'error': 'Unauthorized'}), 401
        g.user_id = user_id
        return f(*args, **kwargs)
    return decorated_function
