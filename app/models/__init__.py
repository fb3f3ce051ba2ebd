from app.models.event import Event
from app.models.registration import Registration, PaymentStatus, TERMINAL_STATUSES, TEAMS

__all__ = ['Event', 'Registration', 'PaymentStatus', 'TERMINAL_STATUSES', 'TEAMS']
