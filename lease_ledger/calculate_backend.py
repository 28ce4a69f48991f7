"""
Lease Calculation Backend API
Returns measurement, amortization schedule and journal entries for a lease
"""

from flask import Blueprint, g, jsonify, request
from typing import Optional
import logging

from lease_ledger import database
from lease_ledger.auth import require_login
from lease_ledger.lease_accounting import (
    InvalidInput,
    JournalGenerator,
    Lease,
    compute,
    generate_schedule,
    parse_lease,
    sublease_income_total,
)

# Create blueprint
calc_bp = Blueprint('calc', __name__, url_prefix='/api')

logger = logging.getLogger(__name__)


def _load_lease(lease_id: int, user_id: int) -> Optional[Lease]:
    """Stored lease owned by user_id, passed through the validation gate"""
    record = database.get_lease(lease_id, user_id)
    if not record:
        return None
    return parse_lease(record, lease_id=str(lease_id), owner_id=record.get('user_id'))


def _calculation_response(lease: Lease) -> dict:
    calculation = compute(lease)
    schedule = generate_schedule(lease, calculation)
    generator = JournalGenerator()
    journals = [generator.initial_entry(lease, calculation)] + generator.monthly_entries(lease, calculation)

    return {
        'lease': lease.to_dict(),
        'calculation': calculation.to_dict(),
        'schedule': [row.to_dict() for row in schedule],
        'journal_entries': [j.to_dict() for j in journals],
        'sublease_income_total': sublease_income_total(lease),
        'pre_adoption_total': lease.pre_adoption_total,
        'summary': generator.get_debit_credit_summary(journals),
    }


@calc_bp.route('/calculate_lease', methods=['POST'])
@require_login
def calculate_lease():
    """
    Calculate an ad-hoc lease payload without storing it
    Returns measurement, schedule and journal entries
    """
    try:
        data = request.get_json(silent=True)
        logger.info(f"📥 Received calculation request from user {g.user_id}")
        lease = parse_lease(data, owner_id=g.user_id)

        response = _calculation_response(lease)
        logger.info(f"✅ Calculation complete: PV={response['calculation']['present_value']:,.2f}")
        return jsonify(response)
    except InvalidInput as e:
        logger.warning(f"⚠️ Calculation rejected: {e}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logger.error(f"❌ Error in calculate_lease: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@calc_bp.route('/leases/<int:lease_id>/calculation', methods=['GET'])
@require_login
def lease_calculation(lease_id):
    """Calculation for a stored lease"""
    try:
        lease = _load_lease(lease_id, g.user_id)
        if lease is None:
            return jsonify({'error': 'Lease not found'}), 404
        return jsonify(_calculation_response(lease))
    except InvalidInput as e:
        logger.warning(f"⚠️ Stored lease {lease_id} failed validation: {e}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logger.error(f"❌ Error calculating lease {lease_id}: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@calc_bp.route('/journal-entries', methods=['GET'])
@require_login
def journal_entries():
    """GET /api/journal-entries?leaseId=xxx - initial and monthly entries for a stored lease"""
    lease_id = request.args.get('leaseId') or request.args.get('lease_id')
    if not lease_id:
        return jsonify({'error': 'leaseId required'}), 400
    if not lease_id.isdigit():
        return jsonify({'error': 'Lease not found'}), 404

    try:
        lease = _load_lease(int(lease_id), g.user_id)
        if lease is None:
            return jsonify({'error': 'Lease not found'}), 404

        entries = JournalGenerator().generate_journals(lease)
        logger.info(f"📝 Generated {len(entries)} journal entries for lease {lease_id}")
        return jsonify({'entries': [e.to_dict() for e in entries]})
    except InvalidInput as e:
        logger.warning(f"⚠️ Stored lease {lease_id} failed validation: {e}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logger.error(f"❌ Error generating journal entries: {e}", exc_info=True)
        return jsonify({'error': 'Internal error'}), 500
