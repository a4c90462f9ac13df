"""
Bearer token authentication for hospitals.

This is the one place a request's credential is turned into a hospital:
the ``Authorization: Bearer <token>`` header is verified and its ``regId``
claim resolved against the registry.  On success ``request.user`` is the
:class:`~registry.models.Hospital`, so views never decode tokens
themselves.
"""
from __future__ import annotations

from rest_framework import authentication

from registry.conf import get_config
from registry.exceptions import AuthError
from registry.services.hospitals import resolve_hospital
from registry.services.tokens import HospitalTokenService


class HospitalTokenAuthentication(authentication.BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None
        if len(header) != 2:
            raise AuthError('Invalid authorization header.')
        try:
            raw = header[1].decode()
        except UnicodeError:
            raise AuthError('Invalid authorization header.')
        return authenticate_token(raw), raw

    def authenticate_header(self, request):
        return self.keyword


def authenticate_token(raw: str):
    """Verify ``raw`` and return the hospital it was issued for.

    Raises :class:`AuthError` for a bad token and
    :class:`~registry.exceptions.NotFoundError` when the hospital no
    longer exists.
    """
    reg_id = HospitalTokenService(get_config()).decode(raw)
    return resolve_hospital(reg_id)
