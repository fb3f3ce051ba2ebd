import re

from marshmallow import Schema, fields, validate, validates, ValidationError, EXCLUDE

from app.providers import MOBILE_NETWORKS


class InitiatePaymentSchema(Schema):
    """Mobile money payment initiation schema"""

    class Meta:
        unknown = EXCLUDE

    account_number = fields.Str(required=True, data_key='accountNumber')
    amount = fields.Decimal(required=True)
    narration = fields.Str(load_default='Event Ticket Payment')
    network = fields.Str(required=True, validate=validate.OneOf(sorted(MOBILE_NETWORKS)))
    registration_id = fields.UUID(load_default=None, data_key='registrationId')

    @validates('account_number')
    def validate_account_number(self, value, **kwargs):
        if not re.search(r'\d', value):
            raise ValidationError('Account number must contain digits')

    @validates('amount')
    def validate_amount(self, value, **kwargs):
        if value <= 0:
            raise ValidationError('Amount must be greater than 0')
        if value.as_tuple().exponent < -2:
            raise ValidationError('Amount must have at most 2 decimal places')
