class AppError(Exception):
    status_code = 500
    error = "Application error"

    def __init__(self, message, status_code=None):
        super().__init__(message)
        if status_code:
            self.status_code = status_code
        self.message = message


class AmountMismatch(AppError):
    status_code = 400
    error = "Amount mismatch"

class RegistrationNotFound(AppError):
    status_code = 404
    error = "Registration not found"

class EventNotFound(AppError):
    status_code = 404
    error = "Event not found"

class RegistrationNotPayable(AppError):
    status_code = 409
    error = "Registration not payable"
