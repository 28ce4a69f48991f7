"""
Authentication Module
Handles user registration, login and bearer token management
"""

from flask import Blueprint, current_app, g, jsonify, request
import logging
import sqlite3

from lease_ledger import database
from .auth import bearer_token, require_login

logger = logging.getLogger(__name__)

# Create authentication blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/api')


@auth_bp.route('/register', methods=['POST'])
def register():
    """User registration endpoint"""
    logger.info("📝 POST /api/register - User registration request")
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    password = data.get('password')
    email = data.get('email')

    if not username or not password:
        logger.warning("❌ Registration failed: Missing username/password")
        return jsonify({'error': 'Username and password required'}), 400

    try:
        user_id = database.create_user(username, password, email)
    except sqlite3.IntegrityError:
        logger.warning(f"❌ Registration failed: username {username} taken")
        return jsonify({'error': 'Username already exists'}), 409

    logger.info(f"✅ User created successfully: user_id={user_id}")
    return jsonify({
        'success': True,
        'user_id': user_id,
        'message': 'User created successfully'
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login endpoint - returns a bearer token"""
    logger.info("🔐 POST /api/login - Login request")
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    password = data.get('password')

    user = database.authenticate_user(username, password) if username and password else None
    if not user:
        logger.warning(f"❌ Login failed: Invalid credentials for username={username}")
        return jsonify({'error': 'Invalid credentials'}), 401

    token = database.issue_token(user['user_id'], current_app.config.get('TOKEN_BYTES', 32))
    logger.info(f"✅ Login successful: user_id={user['user_id']}, username={username}")

    user_info = database.get_user(user['user_id'])
    return jsonify({
        'success': True,
        'token': token,
        'user': user_info
    })


@auth_bp.route('/logout', methods=['POST'])
@require_login
def logout():
    """Revoke the presented bearer token"""
    logger.info(f"🚪 POST /api/logout - User {g.user_id} logging out")
    database.revoke_token(bearer_token())
    return jsonify({'success': True, 'message': 'Logged out'})


@auth_bp.route('/user', methods=['GET'])
@require_login
def get_current_user():
    """Get current user"""
    user = database.get_user(g.user_id)
    return jsonify({'success': True, 'user': user})
