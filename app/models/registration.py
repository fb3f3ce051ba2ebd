import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Uuid

from app.extensions import db


class PaymentStatus(str, Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'
    FREE = 'free'


TERMINAL_STATUSES = frozenset({
    PaymentStatus.COMPLETED.value,
    PaymentStatus.FAILED.value,
    PaymentStatus.FREE.value,
})

TEAMS = ('red', 'yellow', 'blue', 'green')


class Registration(db.Model):
    __tablename__ = 'registrations'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = db.Column(Uuid, db.ForeignKey('events.id'), nullable=False, index=True)

    # Attendee
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), index=True)
    team = db.Column(db.String(20))

    # Payment
    payment_status = db.Column(db.String(20), nullable=False, default=PaymentStatus.PENDING.value, index=True)
    # Not unique: reconciliation treats more than one hit as ambiguous
    payment_reference = db.Column(db.String(64), index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    event = db.relationship('Event', backref=db.backref('registrations', lazy='dynamic'))

    @property
    def is_terminal(self) -> bool:
        return self.payment_status in TERMINAL_STATUSES

    def to_dict(self):
        return {
            'id': str(self.id),
            'event_id': str(self.event_id),
            'full_name': self.full_name,
            'email': self.email,
            'phone': self.phone,
            'team': self.team,
            'payment_status': self.payment_status,
            'payment_reference': self.payment_reference,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<Registration {self.id} - {self.payment_status}>'
