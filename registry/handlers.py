"""
DRF exception handler.

Every exception raised while serving a request, whether one of
:mod:`registry.exceptions`, DRF's own or an unexpected error, leaves the
service as ``{"message": ..., "error"?: ..., "errors"?: [...]}``.
"""
from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from registry.exceptions import InternalError, ValidationError, flatten_errors

logger = logging.getLogger(__name__)


def _body_for(exc: Exception, data: Any) -> dict[str, Any]:
    if isinstance(exc, ValidationError):
        body: dict[str, Any] = {'message': str(exc.detail)}
        if exc.errors:
            body['errors'] = exc.errors
        return body
    if isinstance(exc, DRFValidationError):
        return {'message': 'Validation Error', 'errors': flatten_errors(data)}
    if isinstance(exc, NotAuthenticated):
        return {'message': 'Authorization token is required.'}
    if isinstance(exc, InternalError):
        body = {'message': str(exc.detail)}
        if exc.error:
            body['error'] = exc.error
        return body
    if isinstance(data, dict) and 'detail' in data:
        return {'message': str(data['detail'])}
    return {'message': str(data)}


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception('Unhandled error in %s', context.get('view').__class__.__name__, exc_info=exc)
        return Response(
            {'message': 'Internal server error', 'error': str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, InternalError):
        logger.error('%s: %s', exc.detail, exc.error, exc_info=exc)

    response.data = _body_for(exc, response.data)
    return response
