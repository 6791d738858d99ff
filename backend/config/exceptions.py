"""
Global exception handler for consistent API error responses.

Every error body has the shape ``{"error": str, "code": str, ...}``.
"""
import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from tutor_exams.errors import TutorExamError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    if isinstance(exc, TutorExamError):
        return Response(exc.as_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, ValidationError):
            response.data = {
                'error': 'Invalid request',
                'code': 'validation_error',
                'fields': response.data,
            }
        else:
            response.data = {'error': _get_detail(exc), 'code': _get_code(exc)}
        return response

    if isinstance(exc, PermissionDenied):
        return Response(
            {'error': str(exc) or 'Permission denied', 'code': 'permission_denied'},
            status=status.HTTP_403_FORBIDDEN,
        )

    view = context.get('view') if context else None
    logger.exception('Unhandled exception in %s: %s', type(view).__name__ if view else 'unknown', exc)
    error_detail = 'An internal error occurred.'
    if settings.DEBUG:
        error_detail = f'An internal error occurred: {exc}'
    return Response(
        {'error': error_detail, 'code': 'internal_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _get_detail(exc):
    detail = getattr(exc, 'detail', None)
    if detail is None:
        return str(exc)
    if isinstance(detail, list):
        return str(detail[0]) if detail else 'Error'
    if isinstance(detail, dict):
        return str(detail.get('detail', detail))
    return str(detail)


def _get_code(exc):
    codes = {
        'AuthenticationFailed': 'invalid_credentials',
        'NotAuthenticated': 'not_authenticated',
        'NotFound': 'not_found',
        'Http404': 'not_found',
        'PermissionDenied': 'permission_denied',
        'MethodNotAllowed': 'method_not_allowed',
        'Throttled': 'throttled',
        'ParseError': 'parse_error',
    }
    return codes.get(type(exc).__name__, 'error')
