"""
Utils Package
Utility functions and helpers
"""

from app.utils.logger import get_logger, configure_app_logging, RequestLogger
from app.utils.references import generate_payment_reference
from app.utils.validators import (
    format_phone_number,
    phone_number_variants,
    to_local_phone_number,
    validate_phone_number
)

__all__ = [
    'get_logger',
    'configure_app_logging',
    'RequestLogger',
    'generate_payment_reference',
    'format_phone_number',
    'phone_number_variants',
    'to_local_phone_number',
    'validate_phone_number'
]
