from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Any


class PaymentProvider(ABC):
    """Abstract base class for mobile money gateways"""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize provider with configuration

        Args:
            config: Provider-specific configuration
        """
        self.config = config

    @abstractmethod
    def initialize_payment(
            self,
            account_number: str,
            amount: Decimal,
            network: str,
            narration: str
    ) -> Dict[str, Any]:
        """
        Ask the gateway to send a payment prompt to the customer's phone

        Args:
            account_number: Phone number in 233XXXXXXXXX form
            amount: Payment amount
            network: Network key (e.g. 'mtn')
            narration: Free-text description shown to the customer

        Returns:
            Dict containing:
                - transaction_id: Gateway transaction ID (may be None)
                - status: Always 'pending'; acceptance is not payment
                - message: Gateway message
                - additional_data: Raw gateway response

        Raises:
            PaymentInitializationError: when the gateway rejects the
                request or cannot be reached
        """
        pass

    @abstractmethod
    def handle_webhook(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Normalize a callback payload

        Args:
            payload: Webhook payload

        Returns:
            Dict containing:
                - reference: Reference hint or None
                - phone: Phone hint or None
                - status: 'completed', 'failed' or 'pending'
                - raw_status: Status as received
        """
        pass


class PaymentProviderError(Exception):
    """Base exception for provider errors"""
    pass


class PaymentInitializationError(PaymentProviderError):
    """Raised when payment initialization fails"""
    pass


class WebhookParseError(PaymentProviderError):
    """Raised when a callback payload cannot be interpreted at all"""
    pass
