from typing import Dict, Type
from app.providers.base import PaymentProvider
from app.providers.dcm_provider import DCMProvider, MOBILE_NETWORKS
from flask import current_app

# Provider registry
PROVIDERS: Dict[str, Type[PaymentProvider]] = {
    'dcm': DCMProvider,
}

DEFAULT_PROVIDER = 'dcm'


def get_provider(provider_name: str = DEFAULT_PROVIDER) -> PaymentProvider:
    """
    Get provider instance by name.

    Args:
        provider_name: Name of the provider ('dcm')

    Returns:
        Initialized provider instance

    Raises:
        ValueError: If provider not found
    """
    provider_class = PROVIDERS.get(provider_name.lower())

    if not provider_class:
        raise ValueError(f'Unknown provider: {provider_name}')

    config = _get_provider_config(provider_name.lower())
    return provider_class(config)


def _get_provider_config(provider_name: str) -> dict:
    """Get provider configuration from Flask app config."""

    if provider_name == 'dcm':
        return {
            'gateway_url':  current_app.config.get('PAYMENT_GATEWAY_URL'),
            'partner_code': current_app.config.get('DCM_PARTNER_CODE'),
            'timeout':      current_app.config.get('PAYMENT_GATEWAY_TIMEOUT', 30),
        }

    return {}


__all__ = ['get_provider', 'PROVIDERS', 'MOBILE_NETWORKS', 'DEFAULT_PROVIDER']
