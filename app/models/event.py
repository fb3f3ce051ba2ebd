import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Uuid

from app.extensions import db


class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime)
    location = db.Column(db.String(255))

    # Pricing (GHS); null means no charge
    price = db.Column(db.Numeric(10, 2))
    early_bird_price = db.Column(db.Numeric(10, 2))

    category = db.Column(db.String(20), nullable=False, default='other')  # game-day, party, trivia, travel, other
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    max_capacity = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def is_free(self) -> bool:
        """An event is free when its early-bird price (or, failing that, its price) is unset or zero."""
        price = self.early_bird_price if self.early_bird_price is not None else self.price
        return price is None or price == 0

    def effective_price(self) -> Decimal:
        """Early-bird price when one is set, otherwise the regular price."""
        if self.early_bird_price is not None and self.early_bird_price > 0:
            return Decimal(self.early_bird_price)
        return Decimal(self.price) if self.price is not None else Decimal('0')

    def __repr__(self):
        return f'<Event {self.id} - {self.title}>'
