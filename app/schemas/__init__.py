"""
Schemas Package
Marshmallow schemas for request/response validation
"""

from app.schemas.payment_schema import InitiatePaymentSchema
from app.schemas.registration_schema import (
    CreateRegistrationSchema,
    RegistrationSchema
)

__all__ = [
    'InitiatePaymentSchema',
    'CreateRegistrationSchema',
    'RegistrationSchema'
]
