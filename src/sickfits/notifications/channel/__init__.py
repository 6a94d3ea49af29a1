"""Email channel factory.

Provides get_email_channel() / set_email_channel() to swap implementations:
- FakeEmailAdapter for development and testing
- SMTPEmailAdapter when SMTP_HOST is configured
"""

from sickfits.notifications.channel.email_port import EmailPort
from sickfits.utils.settings import get_settings

_current_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _current_channel
    if _current_channel is None:
        settings = get_settings()
        if settings.smtp_host:
            from sickfits.notifications.channel.smtp_adapter import SMTPEmailAdapter

            _current_channel = SMTPEmailAdapter(
                host=settings.smtp_host,
                port=settings.smtp_port,
                sender=settings.mail_from,
                username=settings.smtp_user,
                password=settings.smtp_password,
            )
        else:
            from sickfits.notifications.channel.fake_email import FakeEmailAdapter

            _current_channel = FakeEmailAdapter(sender=settings.mail_from)
    return _current_channel


def set_email_channel(channel: EmailPort) -> None:
    """Override the active email adapter (useful for tests)."""
    global _current_channel
    _current_channel = channel


def reset_email_channel() -> None:
    """Reset to the settings-derived adapter."""
    global _current_channel
    _current_channel = None
