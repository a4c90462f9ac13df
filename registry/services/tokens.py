"""
Signed hospital tokens.

A token is a JWT whose ``regId`` claim names the issuing hospital.  Signing
and verification go through simplejwt's :class:`TokenBackend` using the key
and lifetime from :class:`~registry.conf.RegistryConfig`.
"""
from __future__ import annotations

from django.utils import timezone
from rest_framework_simplejwt.backends import TokenBackend
from rest_framework_simplejwt.exceptions import TokenBackendError
from rest_framework_simplejwt.utils import datetime_to_epoch

from registry.conf import RegistryConfig
from registry.exceptions import AuthError
from registry.models import Hospital

REG_ID_CLAIM = 'regId'


class HospitalTokenService:
    def __init__(self, config: RegistryConfig):
        self.config = config
        self.backend = TokenBackend(config.token_algorithm, signing_key=config.signing_key)

    def issue(self, hospital: Hospital) -> str:
        now = timezone.now()
        payload = {
            REG_ID_CLAIM: hospital.reg_id,
            'token_type': 'access',
            'iat': datetime_to_epoch(now),
            'exp': datetime_to_epoch(now + self.config.token_lifetime),
        }
        return self.backend.encode(payload)

    def decode(self, raw: str) -> str:
        """Verify ``raw`` and return the registration ID it carries."""
        try:
            payload = self.backend.decode(raw, verify=True)
        except TokenBackendError as exc:
            raise AuthError('Invalid or expired token.') from exc
        reg_id = payload.get(REG_ID_CLAIM)
        if not reg_id:
            raise AuthError('Token does not identify a hospital.')
        return str(reg_id)
