"""SocketIO event handlers"""
import logging

logger = logging.getLogger(__name__)


def register_socketio_handlers(socketio):
    """Register all SocketIO event handlers"""

    @socketio.on('connect')
    def handle_connect():
        logger.debug("Client connected")

    @socketio.on('disconnect')
    def handle_disconnect(*args, **kwargs):
        logger.debug("Client disconnected")
        return True
