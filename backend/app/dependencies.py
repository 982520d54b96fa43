"""Request-scoped collaborators built from settings.

Routers depend on these instead of reading configuration themselves, and
tests replace them through ``app.dependency_overrides``.
"""
from datetime import datetime

from app.config import settings
from app.services.email_service import Mailer
from app.services.geocoding import GeocodingClient
from app.services.time_windows import local_now


def get_now() -> datetime:
    """Current wall-clock time in the platform timezone."""
    return local_now(settings.TIMEZONE)


def get_geocoder() -> GeocodingClient:
    return GeocodingClient(
        api_key=settings.GOOGLE_GEOCODING_KEY,
        base_url=settings.GEOCODING_URL,
        timeout=settings.GEOCODING_TIMEOUT_SECONDS,
    )


def get_mailer() -> Mailer:
    return Mailer(
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.MAIL_FROM,
        password=settings.MAIL_PASSWORD,
        sender=settings.MAIL_FROM,
        timeout=settings.SMTP_TIMEOUT_SECONDS,
    )
