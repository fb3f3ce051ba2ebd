import os
from app import create_app, socketio
from app.extensions import db

app = create_app(os.getenv('FLASK_ENV', 'development'))

@app.shell_context_processor
def make_shell_context():
    from app.models import Registration, Event
    return {
        'db': db,
        'Registration': Registration,
        'Event': Event
    }

if __name__ == '__main__':
    socketio.run(app, debug=True, host='0.0.0.0', port=5000)
