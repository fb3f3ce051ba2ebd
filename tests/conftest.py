"""
Pytest Configuration and Fixtures
"""
import os
import tempfile

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="event-checkout-logs-"))

from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import patch

import fakeredis
import pytest
from app import create_app
from app.extensions import db as _db
from app.models import Event, Registration


@pytest.fixture(scope='session')
def app():
    """Create application for testing"""
    app = create_app('testing')

    # Establish application context
    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture(scope='function')
def session(app):
    """Fresh schema for each test"""
    _db.create_all()

    yield _db.session

    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope='function')
def redis_client():
    """
    Fake Redis for tests + patch the app redis client.
    """
    fake_redis = fakeredis.FakeStrictRedis(decode_responses=True)

    with patch("app.services.idempotency_service.redis_client", fake_redis):
        yield fake_redis

    fake_redis.flushall()


@pytest.fixture(scope='function')
def client(app, session, redis_client):
    """Create a test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def paid_event(session):
    """An event charging GHS 150"""
    event = Event(
        title='Game Day',
        date=datetime(2026, 3, 7, 10, 0),
        location='Accra Sports Stadium',
        price=Decimal('200.00'),
        early_bird_price=Decimal('150.00'),
        category='game-day'
    )
    session.add(event)
    session.commit()

    return event


@pytest.fixture(scope='function')
def free_event(session):
    """An event with no charge"""
    event = Event(
        title='Trivia Friday',
        date=datetime(2026, 3, 13, 19, 0),
        price=None,
        category='trivia'
    )
    session.add(event)
    session.commit()

    return event


@pytest.fixture(scope='function')
def make_registration(session, paid_event):
    """Factory for registrations; later calls are created more recently"""
    base_time = datetime(2026, 2, 1, 12, 0)
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        fields = {
            'event_id': paid_event.id,
            'full_name': f'Attendee {counter["n"]}',
            'email': f'attendee{counter["n"]}@example.com',
            'phone': None,
            'payment_status': 'pending',
            'payment_reference': None,
            'created_at': base_time + timedelta(minutes=counter['n']),
        }
        fields.update(overrides)
        registration = Registration(**fields)
        session.add(registration)
        session.commit()
        return registration

    return _make

