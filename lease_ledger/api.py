"""
API Routes for Lease Management
Lease record create/read/update/delete, scoped to the authenticated owner
"""

from flask import Blueprint, g, jsonify, request
import logging

from lease_ledger import database
from lease_ledger.auth import require_login
from lease_ledger.lease_accounting import InvalidInput, parse_lease

logger = logging.getLogger(__name__)

# Create API blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


def _validated_payload() -> dict:
    """Request JSON after it passes the lease validation gate"""
    data = request.get_json(silent=True)
    parse_lease(data)
    return data


@api_bp.route('/leases', methods=['GET'])
@require_login
def get_leases():
    """Get all leases for current user"""
    user_id = g.user_id
    logger.info(f"📋 GET /api/leases - User {user_id} fetching leases")

    try:
        leases = database.get_leases_by_user(user_id)
        logger.info(f"Found {len(leases)} leases for user {user_id}")
        return jsonify({'success': True, 'leases': leases})
    except Exception as e:
        logger.error(f"Error fetching leases: {e}", exc_info=True)
        return jsonify({'success': False, 'error': str(e)}), 500


@api_bp.route('/leases', methods=['POST'])
@require_login
def create_lease():
    """Create a new lease"""
    user_id = g.user_id
    logger.info(f"➕ POST /api/leases - User {user_id} creating lease")

    try:
        data = _validated_payload()
        lease_id = database.create_lease(user_id, data)
        logger.info(f"✅ Lease saved: lease_id={lease_id}")

        return jsonify({
            'success': True,
            'lease_id': lease_id,
            'lease': database.get_lease(lease_id, user_id),
        }), 201
    except InvalidInput as e:
        logger.warning(f"⚠️ Lease validation failed: {e}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logger.error(f"Error creating lease: {e}", exc_info=True)
        return jsonify({'success': False, 'error': str(e)}), 500


@api_bp.route('/leases/<int:lease_id>', methods=['GET'])
@require_login
def get_lease(lease_id):
    """Get a specific lease"""
    user_id = g.user_id
    logger.info(f"🔍 GET /api/leases/{lease_id} - User {user_id} fetching lease")

    try:
        lease = database.get_lease(lease_id, user_id)
        if lease:
            return jsonify({'success': True, 'lease': lease})
        return jsonify({'success': False, 'error': 'Lease not found'}), 404
    except Exception as e:
        logger.error(f"Error fetching lease: {e}", exc_info=True)
        return jsonify({'success': False, 'error': str(e)}), 500


@api_bp.route('/leases/<int:lease_id>', methods=['PUT'])
@require_login
def update_lease(lease_id):
    """Replace an existing lease"""
    user_id = g.user_id
    logger.info(f"✏️ PUT /api/leases/{lease_id} - User {user_id} updating lease")

    try:
        data = _validated_payload()
        if not database.update_lease(lease_id, user_id, data):
            return jsonify({'success': False, 'error': 'Lease not found'}), 404
        logger.info(f"✅ Lease updated: lease_id={lease_id}")

        return jsonify({
            'success': True,
            'lease_id': lease_id,
            'lease': database.get_lease(lease_id, user_id),
        })
    except InvalidInput as e:
        logger.warning(f"⚠️ Lease validation failed: {e}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logger.error(f"Error updating lease: {e}", exc_info=True)
        return jsonify({'success': False, 'error': str(e)}), 500


@api_bp.route('/leases/<int:lease_id>', methods=['DELETE'])
@require_login
def delete_lease(lease_id):
    """Delete a lease"""
    user_id = g.user_id
    logger.info(f"🗑️ DELETE /api/leases/{lease_id} - User {user_id} deleting lease")

    try:
        if database.delete_lease(lease_id, user_id):
            return jsonify({'success': True, 'message': 'Lease deleted'})
        return jsonify({'success': False, 'error': 'Lease not found'}), 404
    except Exception as e:
        logger.error(f"Error deleting lease: {e}", exc_info=True)
        return jsonify({'success': False, 'error': str(e)}), 500
