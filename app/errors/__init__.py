from app.errors.exceptions import (
    AppError,
    AmountMismatch,
    RegistrationNotFound,
    EventNotFound,
    RegistrationNotPayable,
)

__all__= [
    'AppError',
    'AmountMismatch',
    'RegistrationNotFound',
    'EventNotFound',
    'RegistrationNotPayable',
]
