"""Shared helpers for companion routes"""
import logging

import pydantic
from flask import jsonify

from shared.database.exceptions import ConfigurationError, DatabaseError, ValidationError

logger = logging.getLogger(__name__)


def success_response(data, status_code=200):
    return jsonify({'success': True, 'data': data}), status_code


def error_response(message, status_code):
    return jsonify({'success': False, 'error': message}), status_code


def handle_service_error(e: Exception, action: str):
    """
    Map a service exception to a JSON error response

    ValidationError -> 400, PermissionError -> 403, DatabaseError and
    ConfigurationError -> 500.
    """
    if isinstance(e, ValidationError):
        logger.warning(f"Invalid request while {action}: {str(e)}")
        return error_response(str(e), 400)

    if isinstance(e, PermissionError):
        logger.warning(f"Forbidden while {action}: {str(e)}")
        return error_response(str(e), 403)

    if isinstance(e, ConfigurationError):
        logger.error(f"Configuration error while {action}: {str(e)}")
        return error_response('Service is not configured', 500)

    if isinstance(e, DatabaseError):
        logger.error(f"Database error while {action}: {str(e)}")
        return error_response(str(e), 500)

    logger.exception(f"Unexpected error while {action}")
    return error_response('Internal Server Error', 500)


def invalid_query_response(e: pydantic.ValidationError):
    """400 response listing each rejected query parameter"""
    details = '; '.join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
    logger.warning(f"Invalid query parameters: {details}")
    return error_response(f"Invalid query parameters: {details}", 400)
