import logging

from django.db import DatabaseError
from rest_framework import exceptions
from rest_framework.views import exception_handler

from assessments.exceptions import StorageError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Renders every API failure as {"success": false, "error": ..., "code": ...}.

    Database faults are logged and reported as a generic storage error.
    """
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error("Storage failure in %s", view.__class__.__name__ if view else 'unknown view', exc_info=exc)
        exc = StorageError()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'success': False,
            'error': _first_message(exc.detail),
            'code': 'invalid',
            'errors': exc.detail,
        }
        return response

    detail = getattr(exc, 'detail', None)
    codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
    response.data = {
        'success': False,
        'error': str(detail) if detail is not None else str(exc),
        'code': codes if isinstance(codes, str) else 'error',
    }
    return response


def _first_message(detail):
    if isinstance(detail, dict):
        for field, errors in detail.items():
            message = _first_message(errors)
            if field == 'non_field_errors':
                return message
            return f"{field}: {message}"
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)
