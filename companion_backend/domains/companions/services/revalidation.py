"""
View revalidation notifications

After a mutating write the front-end is told to re-fetch the view identified
by a path. Delivery goes through the app's SocketIO instance.
"""
import logging
from typing import Any, Optional

from flask import current_app, has_app_context

from domains.companions.config import REVALIDATE_EVENT

logger = logging.getLogger(__name__)


def _default_socketio() -> Optional[Any]:
    if not has_app_context():
        return None
    return current_app.extensions.get('socketio')


def revalidate_path(path: str, socketio: Optional[Any] = None) -> bool:
    """
    Ask the presentation layer to re-render the view at path

    Args:
        path: View path, e.g. '/companions/abc'
        socketio: SocketIO instance; defaults to the current app's extension

    Returns:
        bool: True if the notification was emitted
    """
    if not path:
        return False

    socketio = socketio or _default_socketio()
    if socketio is None:
        logger.debug(f"No SocketIO available, skipping revalidation of {path}")
        return False

    try:
        socketio.emit(REVALIDATE_EVENT, {'path': path})
        logger.debug(f"Revalidation requested for {path}")
        return True
    except Exception as e:
        logger.error(f"Error emitting revalidation for {path}: {e}")
        return False
