from flask import Blueprint, request, jsonify
from marshmallow import ValidationError

from app.schemas.payment_schema import InitiatePaymentSchema
from app.services.payment_service import PaymentService
from app.services.idempotency_service import idempotent

payments_bp = Blueprint('payments', __name__)

initiate_schema = InitiatePaymentSchema()


@payments_bp.route('/initiate', methods=['POST'])
@idempotent(ttl=86400)
def initiate_payment():
    """
    Send a mobile money prompt to the customer's phone

    Headers:
        - Idempotency-Key: optional; repeats replay the first response

    Body:
        {
            "accountNumber": "0241234567",
            "amount": "150.00",
            "narration": "Ticket: Game Day - Ama Mensah",
            "network": "mtn",
            "registrationId": "6f1c..."
        }
    """
    try:
        data = initiate_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({
            'success': False,
            'error': 'Missing or invalid fields: ' + ', '.join(sorted(e.messages)),
            'messages': e.messages
        }), 400

    result = PaymentService.initiate_payment(
        account_number=data['account_number'],
        amount=data['amount'],
        network=data['network'],
        narration=data['narration'],
        registration_id=data.get('registration_id')
    )

    return jsonify(result), 200 if result['success'] else 502
