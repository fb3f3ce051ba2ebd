"""
Webhook API Endpoints
Handles payment callbacks from the mobile money gateway
"""

from flask import Blueprint, request, jsonify

from app.providers import PROVIDERS
from app.services.webhook_service import WebhookService
from app.utils.logger import get_logger

webhooks_bp = Blueprint('webhooks', __name__)
logger = get_logger(__name__)


@webhooks_bp.route('/<provider>', methods=['POST'])
def receive_webhook(provider):
    """
    Receive a payment callback

    Path Parameters:
        provider: Payment provider name (dcm)

    Body:
        Gateway-defined JSON; see DCMProvider.handle_webhook

    Always answers 200 for a known provider. The gateway redelivers on
    anything else and a redelivered callback is not safe to apply twice.
    """
    if provider.lower() not in PROVIDERS:
        return jsonify({
            'success': False,
            'error': f'Unknown provider: {provider}'
        }), 404

    try:
        payload = request.get_json(force=True)
        summary = WebhookService.reconcile(provider.lower(), payload)
        return jsonify(summary), 200

    except Exception as e:
        logger.exception(f'Webhook processing error: {e}')
        logger.error('Raw body: %s', request.get_data(as_text=True)[:2000])

        return jsonify({
            'received': True,
            'error': 'Processing error',
            'matched': False
        }), 200
