"""
Webhook Service
Reconciles asynchronous gateway callbacks with pending registrations
"""

import json
from typing import Dict, Any, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models import Registration, PaymentStatus
from app.providers import get_provider
from app.utils.logger import get_logger
from app.utils.validators import phone_number_variants
from app.websockets.events import emit_registration_update

logger = get_logger(__name__)


class MatchResult(NamedTuple):
    registration: Registration
    strategy: str
    applied: bool


class WebhookService:
    """Service for handling gateway callbacks"""

    STRATEGY_REFERENCE = 'reference'
    STRATEGY_PHONE = 'phone'
    STRATEGY_MOST_RECENT = 'most_recent_pending'

    @staticmethod
    def reconcile(provider: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply one callback to at most one registration

        Strategies are tried in order and the first match wins:
        exact payment reference, then phone number among pending
        registrations, then the most recent pending registration.

        Args:
            provider: Payment provider name
            payload: Webhook payload (parsed JSON)

        Returns:
            Summary for the gateway: received, reference, status,
            registrationId, matched, applied
        """
        logger.info('=== WEBHOOK RECEIVED ===')
        logger.info('Full payload: %s', json.dumps(payload, default=str, sort_keys=True))

        callback = get_provider(provider).handle_webhook(payload)
        reference = callback['reference']
        phone = callback['phone']
        status = callback['status']

        logger.info('Extracted reference: %s', reference)
        logger.info('Extracted phone: %s', phone)
        logger.info('Raw status: %s, normalized: %s', callback['raw_status'], status)

        match = None

        if reference:
            match = WebhookService._match_by_reference(reference, status)

        if match is None and phone:
            match = WebhookService._match_by_phone(phone, status)

        if match is None:
            match = WebhookService._match_most_recent_pending(status)

        summary = {
            'received': True,
            'status': status,
            'matched': match is not None,
            'applied': bool(match and match.applied),
        }
        if reference:
            summary['reference'] = reference
        if match:
            summary['registrationId'] = str(match.registration.id)
            logger.info('Matched registration %s by %s', match.registration.id, match.strategy)
        else:
            logger.info('No registration matched')

        logger.info('=== WEBHOOK COMPLETE ===')

        return summary

    @staticmethod
    def _match_by_reference(reference: str, status: str) -> Optional[MatchResult]:
        logger.info('Trying to match by payment_reference: %s', reference)
        try:
            candidates = Registration.query.filter_by(payment_reference=reference).limit(2).all()

            if not candidates:
                logger.info('No match by reference')
                return None

            if len(candidates) > 1:
                logger.warning('Reference %s matches more than one registration, skipping', reference)
                return None

            return WebhookService._apply_status(candidates[0], status, WebhookService.STRATEGY_REFERENCE)

        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Reference match failed: %s', e)
            return None

    @staticmethod
    def _match_by_phone(phone: str, status: str) -> Optional[MatchResult]:
        variants = phone_number_variants(phone)
        logger.info('Trying fallback: match by phone number, variants: %s', variants)
        try:
            registration = Registration.query.filter(
                Registration.phone.in_(variants),
                Registration.payment_status == PaymentStatus.PENDING.value
            ).order_by(Registration.created_at.desc()).first()

            if not registration:
                logger.info('No match by phone')
                return None

            return WebhookService._apply_status(registration, status, WebhookService.STRATEGY_PHONE)

        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Phone match failed: %s', e)
            return None

    @staticmethod
    def _match_most_recent_pending(status: str) -> Optional[MatchResult]:
        logger.info('Trying last resort: most recent pending registration')
        try:
            registration = Registration.query.filter(
                Registration.payment_status == PaymentStatus.PENDING.value
            ).order_by(Registration.created_at.desc()).first()

            if not registration:
                logger.info('No pending registration to fall back to')
                return None

            # Nothing ties this row to the callback. Concurrent checkouts can
            # make it the wrong one.
            logger.warning(
                'Low-confidence match: registration %s (phone %s, reference %s) picked as most recent pending',
                registration.id, registration.phone, registration.payment_reference
            )
            return WebhookService._apply_status(registration, status, WebhookService.STRATEGY_MOST_RECENT)

        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Most recent pending match failed: %s', e)
            return None

    @staticmethod
    def _apply_status(registration: Registration, status: str, strategy: str) -> MatchResult:
        """
        Write ``status`` unless the registration already settled on a different one

        Completed, failed and free are final; a late or duplicate callback
        disagreeing with them is logged and dropped.
        """
        current = registration.payment_status

        if current == status:
            logger.info('Registration %s already %s', registration.id, status)
            return MatchResult(registration, strategy, applied=False)

        if registration.is_terminal:
            logger.warning(
                'Conflict: registration %s is %s, ignoring callback status %s',
                registration.id, current, status
            )
            return MatchResult(registration, strategy, applied=False)

        registration.payment_status = status
        db.session.commit()

        logger.info('Registration %s: %s -> %s', registration.id, current, status)

        emit_registration_update(registration)

        return MatchResult(registration, strategy, applied=True)
