"""
Registry configuration.

The handful of settings the registry services depend on are gathered into
an immutable :class:`RegistryConfig` so they can be handed to services
explicitly (and swapped in tests) instead of being read from
``django.conf.settings`` all over the code base.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings


@dataclass(frozen=True)
class RegistryConfig:
    signing_key: str
    token_algorithm: str = 'HS256'
    token_lifetime: timedelta = timedelta(hours=24)
    upload_max_mb: int = 5
    allowed_upload_types: tuple[str, ...] = ('image/',)

    @property
    def upload_max_bytes(self) -> int:
        return self.upload_max_mb * 1024 * 1024

    @classmethod
    def from_settings(cls) -> 'RegistryConfig':
        return cls(
            signing_key=getattr(settings, 'JWT_SECRET_KEY', None) or settings.SECRET_KEY,
            token_algorithm=getattr(settings, 'TOKEN_ALGORITHM', 'HS256'),
            token_lifetime=timedelta(hours=getattr(settings, 'TOKEN_LIFETIME_HOURS', 24)),
            upload_max_mb=getattr(settings, 'UPLOAD_MAX_MB', 5),
            allowed_upload_types=tuple(getattr(settings, 'ALLOWED_UPLOAD_TYPES', ('image/',))),
        )


def get_config() -> RegistryConfig:
    """Build the configuration from the current Django settings."""
    return RegistryConfig.from_settings()
