"""
Database layer - users, bearer tokens and lease records
Lease records are stored as the validated JSON payload keyed by lease_id
"""
import hashlib
import json
import secrets
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

import bcrypt

logger = logging.getLogger(__name__)

DATABASE_PATH = "lease_ledger.db"

# Columns kept outside the JSON payload
RECORD_FIELDS = ('lease_id', 'user_id', 'created_at', 'updated_at')


@contextmanager
def get_db_connection():
    """Context manager for database connections"""
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_database(path: Optional[Union[str, Path]] = None):
    """Initialize database tables - users, tokens and leases"""
    global DATABASE_PATH
    if path is not None:
        DATABASE_PATH = str(path)

    with get_db_connection() as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                user_id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                email TEXT,
                is_active INTEGER DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        conn.execute("""
            CREATE TABLE IF NOT EXISTS api_tokens (
                token_hash TEXT PRIMARY KEY,
                user_id INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(user_id)
            )
        """)

        conn.execute("""
            CREATE TABLE IF NOT EXISTS leases (
                lease_id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                name TEXT,
                payload TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(user_id)
            )
        """)
    logger.info(f"✅ Database initialized at {DATABASE_PATH}")


# ============ USER MANAGEMENT ============

def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against hash"""
    return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))


def create_user(username: str, password: str, email: Optional[str] = None) -> int:
    """Create a new user"""
    password_hash = hash_password(password)
    with get_db_connection() as conn:
        cursor = conn.execute(
            "INSERT INTO users (username, password_hash, email) VALUES (?, ?, ?)",
            (username, password_hash, email)
        )
        return cursor.lastrowid


def authenticate_user(username: str, password: str) -> Optional[Dict]:
    """Authenticate user and return user data if valid"""
    with get_db_connection() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE username = ? AND is_active = 1",
            (username,)
        ).fetchone()

        if row and verify_password(password, row['password_hash']):
            return dict(row)
        return None


def get_user(user_id: int) -> Optional[Dict]:
    """Get user by ID"""
    with get_db_connection() as conn:
        row = conn.execute(
            "SELECT user_id, username, email, is_active, created_at FROM users WHERE user_id = ?",
            (user_id,)
        ).fetchone()
        return dict(row) if row else None


# ============ BEARER TOKENS ============

def _token_hash(token: str) -> str:
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def issue_token(user_id: int, nbytes: int = 32) -> str:
    """Issue a new bearer token for a user; only its hash is stored"""
    token = secrets.token_urlsafe(nbytes)
    with get_db_connection() as conn:
        conn.execute(
            "INSERT INTO api_tokens (token_hash, user_id) VALUES (?, ?)",
            (_token_hash(token), user_id)
        )
    return token


def resolve_token(token: str) -> Optional[int]:
    """Owner user_id for a bearer token, None when unknown or the user is inactive"""
    if not token:
        return None
    with get_db_connection() as conn:
        row = conn.execute(
            """SELECT t.user_id FROM api_tokens t JOIN users u ON u.user_id = t.user_id
               WHERE t.token_hash = ? AND u.is_active = 1""",
            (_token_hash(token),)
        ).fetchone()
        return row['user_id'] if row else None


def revoke_token(token: str) -> bool:
    with get_db_connection() as conn:
        cursor = conn.execute("DELETE FROM api_tokens WHERE token_hash = ?", (_token_hash(token),))
        return cursor.rowcount > 0


# ============ LEASE MANAGEMENT ============

def _row_to_lease(row: sqlite3.Row) -> Dict:
    """Merge the stored payload with the record columns"""
    try:
        lease_dict = json.loads(row['payload'])
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"⚠️ Could not parse payload for lease {row['lease_id']}: {e}")
        lease_dict = {}
    for key in RECORD_FIELDS:
        lease_dict[key] = row[key]
    return lease_dict


def _payload_json(lease_data: Dict) -> str:
    payload = {k: v for k, v in lease_data.items() if k not in RECORD_FIELDS}
    return json.dumps(payload, sort_keys=True)


def create_lease(user_id: int, lease_data: Dict) -> int:
    """Store a new lease for a user and return its lease_id"""
    with get_db_connection() as conn:
        cursor = conn.execute(
            "INSERT INTO leases (user_id, name, payload) VALUES (?, ?, ?)",
            (user_id, lease_data.get('name'), _payload_json(lease_data))
        )
        return cursor.lastrowid


def get_lease(lease_id: int, user_id: Optional[int] = None) -> Optional[Dict]:
    """Get lease by ID. If user_id is provided, check for ownership."""
    with get_db_connection() as conn:
        if user_id is not None:
            row = conn.execute(
                "SELECT * FROM leases WHERE lease_id = ? AND user_id = ?",
                (lease_id, user_id)
            ).fetchone()
        else:
            row = conn.execute(
                "SELECT * FROM leases WHERE lease_id = ?",
                (lease_id,)
            ).fetchone()

        if not row:
            return None
        return _row_to_lease(row)


def get_leases_by_user(user_id: int) -> List[Dict]:
    """Get all leases for a specific user"""
    with get_db_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM leases WHERE user_id = ? ORDER BY created_at DESC, lease_id DESC",
            (user_id,)
        ).fetchall()
        return [_row_to_lease(row) for row in rows]


def update_lease(lease_id: int, user_id: int, lease_data: Dict) -> bool:
    """Replace a lease payload (only if owned by user)"""
    with get_db_connection() as conn:
        cursor = conn.execute(
            """UPDATE leases SET name = ?, payload = ?, updated_at = CURRENT_TIMESTAMP
               WHERE lease_id = ? AND user_id = ?""",
            (lease_data.get('name'), _payload_json(lease_data), lease_id, user_id)
        )
        return cursor.rowcount > 0


def delete_lease(lease_id: int, user_id: int) -> bool:
    """Delete a lease (only if owned by user)"""
    with get_db_connection() as conn:
        cursor = conn.execute(
            "DELETE FROM leases WHERE lease_id = ? AND user_id = ?",
            (lease_id, user_id)
        )
        return cursor.rowcount > 0
