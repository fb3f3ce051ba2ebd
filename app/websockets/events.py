from flask_socketio import emit, join_room, leave_room
from app.extensions import socketio
from app.utils.logger import get_logger

logger = get_logger(__name__)


def registration_room(registration_id) -> str:
    return f'registration_{registration_id}'


@socketio.on('connect')
def handle_connect():
    """Handle client connection"""
    logger.info('Client connected')
    emit('connected', {'message': 'Connected to checkout updates'})


@socketio.on('disconnect')
def handle_disconnect():
    """Handle client disconnection"""
    logger.info('Client disconnected')


@socketio.on('subscribe_registration')
def handle_subscribe_registration(data):
    """Subscribe to payment status changes of one registration"""
    registration_id = (data or {}).get('registration_id')
    if registration_id:
        room = registration_room(registration_id)
        join_room(room)
        emit('subscribed', {
            'message': f'Subscribed to registration {registration_id}',
            'room': room
        })


@socketio.on('unsubscribe_registration')
def handle_unsubscribe_registration(data):
    """Unsubscribe from registration updates"""
    registration_id = (data or {}).get('registration_id')
    if registration_id:
        leave_room(registration_room(registration_id))
        emit('unsubscribed', {
            'message': f'Unsubscribed from registration {registration_id}'
        })


def emit_registration_update(registration):
    """
    Push the registration to clients watching it

    Args:
        registration: Registration whose payment status changed
    """
    try:
        socketio.emit('registration_update', {
            'registration': registration.to_dict()
        }, to=registration_room(registration.id))
    except Exception as e:
        # The row is already committed; a missed push falls back to polling
        logger.warning(f'Failed to push update for registration {registration.id}: {e}')
