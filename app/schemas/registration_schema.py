from marshmallow import Schema, fields, validate, validates, ValidationError, EXCLUDE

from app.models import TEAMS
from app.utils.validators import validate_phone_number


class CreateRegistrationSchema(Schema):
    """Registration form schema"""

    class Meta:
        unknown = EXCLUDE

    event_id = fields.UUID(required=True, data_key='eventId')
    full_name = fields.Str(required=True, data_key='fullName', validate=validate.Length(min=1, max=255))
    email = fields.Email(required=True)
    phone = fields.Str(load_default=None, allow_none=True)
    team = fields.Str(load_default=None, allow_none=True, validate=validate.OneOf(TEAMS))

    @validates('phone')
    def validate_phone(self, value, **kwargs):
        if value is None:
            return
        is_valid, error = validate_phone_number(value)
        if not is_valid:
            raise ValidationError(error)


class RegistrationSchema(Schema):
    """Registration response schema"""
    id = fields.UUID(dump_only=True)
    event_id = fields.UUID(dump_only=True)
    full_name = fields.Str(dump_only=True)
    email = fields.Str(dump_only=True)
    phone = fields.Str(dump_only=True)
    team = fields.Str(dump_only=True)
    payment_status = fields.Str(dump_only=True)
    payment_reference = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
