"""
Health Check Endpoints
"""

from datetime import datetime, timezone

from flask import Blueprint, jsonify
from sqlalchemy import text

from app.extensions import db, redis_client

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint

    Returns:
        200 if system is healthy
        503 if system has issues
    """
    health_status = {
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'service': 'event-checkout',
        'version': '1.0.0'
    }

    checks = {}
    overall_healthy = True

    # Database check
    try:
        db.session.execute(text('SELECT 1'))
        checks['database'] = {
            'status': 'healthy',
            'message': 'Database connection OK'
        }
    except Exception as e:
        checks['database'] = {
            'status': 'unhealthy',
            'message': f'Database error: {str(e)}'
        }
        overall_healthy = False

    # Redis check
    try:
        redis_client.set('health_check', 'ok', ex=10)
        if redis_client.get('health_check') == 'ok':
            checks['redis'] = {
                'status': 'healthy',
                'message': 'Redis connection OK'
            }
        else:
            checks['redis'] = {
                'status': 'unhealthy',
                'message': 'Redis read/write failed'
            }
            overall_healthy = False
    except Exception as e:
        checks['redis'] = {
            'status': 'unhealthy',
            'message': f'Redis error: {str(e)}'
        }
        overall_healthy = False

    health_status['checks'] = checks
    health_status['status'] = 'healthy' if overall_healthy else 'unhealthy'

    status_code = 200 if overall_healthy else 503

    return jsonify(health_status), status_code


@health_bp.route('/health/live', methods=['GET'])
def liveness_probe():
    """Liveness probe: the process is up"""
    return jsonify({'status': 'alive'}), 200
