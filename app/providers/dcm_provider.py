"""
DCM Mobile Money Gateway

Initiation:  POST <gateway_url>  (X-Partner-Code header)
             {accountNumber, amount, narration, network}
Callback:    gateway POSTs an unversioned JSON body to our webhook at some
             later time. Field names and status words drift between
             deployments, so every value is looked up under several keys.
"""

import logging
import requests
from decimal import Decimal
from typing import Dict, Any, Iterable, Optional

from app.providers.base import (
    PaymentProvider,
    PaymentInitializationError,
    WebhookParseError,
)

logger = logging.getLogger(__name__)


MOBILE_NETWORKS: Dict[str, Dict[str, str]] = {
    'mtn':        {'code': '300591', 'name': 'MTN Mobile Money', 'short_name': 'MTN'},
    'airteltigo': {'code': '300592', 'name': 'AirtelTigo Money', 'short_name': 'AirtelTigo'},
    'telecel':    {'code': '300594', 'name': 'Telecel Cash', 'short_name': 'Telecel'},
}

# Callback field names, highest priority first
STATUS_FIELDS = ('status', 'transaction_status')
REFERENCE_FIELDS = ('reference', 'payment_reference', 'transactionId')
PHONE_FIELDS = ('accountNumber', 'phone', 'msisdn')

COMPLETED_STATUSES = frozenset({'success', 'completed', 'successful', 'approved'})
FAILED_STATUSES = frozenset({'failed', 'failure', 'declined', 'rejected'})


def normalize_status(raw_status: Any) -> str:
    """Map a gateway status word to completed, failed or pending."""
    status = str(raw_status or '').strip().lower()
    if status in COMPLETED_STATUSES:
        return 'completed'
    if status in FAILED_STATUSES:
        return 'failed'
    return 'pending'


def first_present(payload: Dict[str, Any], fields: Iterable[str]) -> Optional[str]:
    """Return the first non-empty value among ``fields``, as a string."""
    for field in fields:
        value = payload.get(field)
        if value is None or isinstance(value, (dict, list)):
            continue
        value = str(value).strip()
        if value:
            return value
    return None


class DCMProvider(PaymentProvider):
    """
    Mobile money gateway adapter.

    Required config keys:
        gateway_url   – Accept-payment endpoint
        partner_code  – Sent as X-Partner-Code
    Optional:
        timeout       – Seconds to wait for the gateway (default 30)
    """

    DEFAULT_NARRATION = 'Event Ticket Payment'

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)

        self.gateway_url  = config.get('gateway_url', '')
        self.partner_code = config.get('partner_code', '')
        self.timeout      = config.get('timeout', 30)

        if not self.gateway_url:
            raise ValueError("DCMProvider: 'gateway_url' is required in config")
        if not self.partner_code:
            raise ValueError("DCMProvider: 'partner_code' is required in config")

    def _headers(self) -> Dict[str, str]:
        return {
            'Content-Type': 'application/json',
            'X-Partner-Code': self.partner_code,
        }

    def initialize_payment(
            self,
            account_number: str,
            amount: Decimal,
            network: str,
            narration: str
    ) -> Dict[str, Any]:
        network_info = MOBILE_NETWORKS.get((network or '').lower())
        if not network_info:
            raise PaymentInitializationError(f'Unsupported network: {network}')

        payload = {
            'accountNumber': account_number,
            'amount': str(amount),
            'narration': narration or self.DEFAULT_NARRATION,
            'network': network_info['code'],
        }

        try:
            resp = requests.post(
                self.gateway_url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error('Payment gateway unreachable: %s', e)
            raise PaymentInitializationError('Unable to process payment. Please try again.') from e

        logger.info('Payment gateway response: %s', resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error('Malformed gateway response (%s): %s', resp.status_code, resp.text[:500])
            raise PaymentInitializationError('Unexpected response from payment gateway') from e

        if not isinstance(data, dict):
            logger.error('Malformed gateway response (%s): %s', resp.status_code, resp.text[:500])
            raise PaymentInitializationError('Unexpected response from payment gateway')

        if not resp.ok or data.get('success') is False:
            raise PaymentInitializationError(
                data.get('message') or data.get('error') or 'Payment failed'
            )

        return {
            'transaction_id': data.get('transactionId') or data.get('reference'),
            'status': 'pending',
            'message': data.get('message') or 'Payment initiated successfully',
            'additional_data': {'raw': data},
        }

    def handle_webhook(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise WebhookParseError(f'Expected a JSON object, got {type(payload).__name__}')

        raw_status = first_present(payload, STATUS_FIELDS)

        return {
            'reference': first_present(payload, REFERENCE_FIELDS),
            'phone': first_present(payload, PHONE_FIELDS),
            'status': normalize_status(raw_status),
            'raw_status': raw_status,
        }
