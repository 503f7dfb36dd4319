"""Flask extensions initialization"""
import os

from flask_socketio import SocketIO
from flask_cors import CORS

socketio = SocketIO()
cors = CORS()

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _cors_origins():
    # CORS_ORIGINS=https://app.example.com,http://localhost:3000
    configured = os.environ.get('CORS_ORIGINS', '')
    if not configured:
        return DEFAULT_CORS_ORIGINS
    if configured == '*':
        return '*'
    return [origin.strip() for origin in configured.split(',') if origin.strip()]


def init_extensions(app):
    """Initialize Flask extensions with app"""
    origins = _cors_origins()

    socketio.init_app(app,
                     cors_allowed_origins=origins,
                     async_mode='threading',
                     logger=False,
                     engineio_logger=False,
                     ping_timeout=60,
                     ping_interval=25,
                     transports=['polling', 'websocket'],
                     always_connect=True)

    app.extensions['socketio'] = socketio

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": origins,
            "methods": ["GET", "POST", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
            "supports_credentials": True,
            "max_age": 3600
        }
    })

    return socketio
