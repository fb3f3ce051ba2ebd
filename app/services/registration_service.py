"""
Registration Service
Creates registrations at checkout and looks them up for the payment flow
"""

import uuid
from typing import Optional

from app.extensions import db
from app.errors import EventNotFound, RegistrationNotFound
from app.models import Event, Registration, PaymentStatus
from app.utils.logger import get_logger
from app.utils.validators import to_local_phone_number

logger = get_logger(__name__)


class RegistrationService:
    """Registration lifecycle outside of payment reconciliation"""

    @staticmethod
    def create_registration(
            event_id: uuid.UUID,
            full_name: str,
            email: str,
            phone: Optional[str] = None,
            team: Optional[str] = None
    ) -> Registration:
        """
        Create a registration for an event

        Free events are registered as ``free`` straight away; paid events
        start ``pending`` and wait for the payment callback.

        Raises:
            EventNotFound: if the event does not exist
        """
        event = db.session.get(Event, event_id)
        if not event:
            raise EventNotFound(f'Event {event_id} not found')

        status = PaymentStatus.FREE if event.is_free() else PaymentStatus.PENDING

        registration = Registration(
            event_id=event.id,
            full_name=full_name.strip(),
            email=email.strip(),
            phone=to_local_phone_number(phone) if phone else None,
            team=team,
            payment_status=status.value
        )

        db.session.add(registration)
        db.session.commit()

        logger.info(f'Registration {registration.id} created for event {event.id} ({status.value})')

        return registration

    @staticmethod
    def get_registration(registration_id: uuid.UUID) -> Registration:
        registration = db.session.get(Registration, registration_id)
        if not registration:
            raise RegistrationNotFound(f'Registration {registration_id} not found')
        return registration

    @staticmethod
    def record_payment_reference(registration: Registration, reference: str) -> Registration:
        """Attach a freshly minted payment reference; the status stays as it is."""
        previous = registration.payment_reference
        registration.payment_reference = reference
        db.session.commit()

        if previous and previous != reference:
            logger.info(f'Registration {registration.id} reference replaced: {previous} -> {reference}')
        else:
            logger.info(f'Registration {registration.id} awaiting confirmation for {reference}')

        return registration
