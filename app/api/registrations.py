from flask import Blueprint, request, jsonify
from marshmallow import ValidationError

from app.schemas.registration_schema import CreateRegistrationSchema, RegistrationSchema
from app.services.registration_service import RegistrationService

registrations_bp = Blueprint('registrations', __name__)

create_schema = CreateRegistrationSchema()
registration_schema = RegistrationSchema()


@registrations_bp.route('', methods=['POST'])
def create_registration():
    """
    Register an attendee for an event

    Body:
        {
            "eventId": "0b6e...",
            "fullName": "Ama Mensah",
            "email": "ama@example.com",
            "phone": "0241234567",
            "team": "red"
        }
    """
    try:
        data = create_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({
            'success': False,
            'error': 'Validation error',
            'messages': e.messages
        }), 400

    registration = RegistrationService.create_registration(
        event_id=data['event_id'],
        full_name=data['full_name'],
        email=data['email'],
        phone=data.get('phone'),
        team=data.get('team')
    )

    return jsonify({
        'success': True,
        'data': registration_schema.dump(registration)
    }), 201


@registrations_bp.route('/<uuid:registration_id>', methods=['GET'])
def get_registration(registration_id):
    """Current payment status of a registration"""
    registration = RegistrationService.get_registration(registration_id)

    return jsonify({
        'success': True,
        'data': registration_schema.dump(registration)
    }), 200
