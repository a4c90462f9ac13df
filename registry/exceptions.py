"""
Error taxonomy.

Views and services raise the exceptions below; :mod:`registry.handlers`
turns them into the ``{"message": ..., "error"?: ..., "errors"?: [...]}``
response body.  This module depends on ``rest_framework.exceptions`` only,
since the authentication class imports it while DRF is still loading.
"""
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotFound


class ValidationError(APIException):
    """Missing or malformed input; lists every offending field."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation Error'
    default_code = 'validation_error'

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        super().__init__(detail=message or self.default_detail)
        self.errors = list(errors or [])


class AuthError(AuthenticationFailed):
    """Missing, malformed, expired or tampered bearer token."""
    default_detail = 'Invalid or expired token.'


class NotFoundError(NotFound):
    default_detail = 'Not found.'


class InternalError(APIException):
    """A store or runtime failure, reported with an operation-specific message."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'server_error'

    def __init__(self, message: str | None = None, error: BaseException | str | None = None):
        super().__init__(detail=message or self.default_detail)
        self.error = str(error) if error is not None else None


def flatten_errors(detail: Any) -> list[str]:
    """Flatten DRF's nested error structure into messages, in field order."""
    if isinstance(detail, dict):
        out: list[str] = []
        for value in detail.values():
            out.extend(flatten_errors(value))
        return out
    if isinstance(detail, (list, tuple)):
        out = []
        for value in detail:
            out.extend(flatten_errors(value))
        return out
    return [str(detail)]
