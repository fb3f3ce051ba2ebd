"""
Payment Service
Relays mobile money payment requests to the gateway
"""

import uuid
from decimal import Decimal
from typing import Dict, Any, Optional

from app.errors import AmountMismatch, RegistrationNotPayable
from app.models import PaymentStatus
from app.providers import get_provider
from app.providers.base import PaymentInitializationError
from app.services.registration_service import RegistrationService
from app.utils.logger import get_logger
from app.utils.references import generate_payment_reference
from app.utils.validators import format_phone_number

logger = get_logger(__name__)


def mask_phone(phone: str) -> str:
    return phone[:6] + '****'


class PaymentService:
    """Stateless proxy in front of the mobile money gateway"""

    @staticmethod
    def initiate_payment(
            account_number: str,
            amount: Decimal,
            network: str,
            narration: str,
            registration_id: Optional[uuid.UUID] = None
    ) -> Dict[str, Any]:
        """
        Trigger a payment prompt on the customer's phone

        A reference is minted before the gateway is called and, when a
        registration is given, stored on it so that a callback arriving
        while the gateway is still answering can be matched.

        Args:
            account_number: Phone number in any local or international form
            amount: Amount to charge
            network: Network key (mtn, airteltigo, telecel)
            narration: Text shown on the prompt
            registration_id: Registration being paid for

        Returns:
            Dict containing success, reference and either message and
            transactionId (accepted) or error (rejected). Acceptance only
            means the prompt was queued.

        Raises:
            RegistrationNotFound: unknown registration_id
            RegistrationNotPayable: registration is no longer pending
            AmountMismatch: amount differs from the registration's ticket price
        """
        formatted_phone = format_phone_number(account_number)
        reference = generate_payment_reference()

        if registration_id:
            registration = RegistrationService.get_registration(registration_id)
            if registration.payment_status != PaymentStatus.PENDING.value:
                raise RegistrationNotPayable(
                    f'Registration {registration.id} is {registration.payment_status}'
                )
            price = registration.event.effective_price()
            if amount != price:
                raise AmountMismatch(f'Amount {amount} does not match ticket price {price}')
            RegistrationService.record_payment_reference(registration, reference)

        logger.info('Processing payment: %s', {
            'accountNumber': mask_phone(formatted_phone),
            'amount': str(amount),
            'network': network,
            'reference': reference,
        })

        try:
            provider = get_provider()
            result = provider.initialize_payment(
                account_number=formatted_phone,
                amount=amount,
                network=network,
                narration=narration
            )
        except PaymentInitializationError as e:
            logger.warning(f'Payment {reference} rejected: {e}')
            return {
                'success': False,
                'error': str(e),
                'reference': reference
            }

        logger.info(f'Payment {reference} accepted by gateway: {result.get("transaction_id")}')

        response = {
            'success': True,
            'message': result.get('message'),
            'reference': reference
        }
        if result.get('transaction_id'):
            response['transactionId'] = result['transaction_id']

        return response
