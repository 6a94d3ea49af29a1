"""Runtime settings read from the environment.

Values are read once into a frozen ``Settings`` instance. Collaborators that
need them (token issuer, payment gateway, mail channel) receive the values at
construction instead of reading the environment themselves.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    app_secret: str | None = None
    frontend_url: str = "http://localhost:7777"
    currency: str = "gbp"
    mail_from: str = "no-reply@sickfits.example"
    stripe_secret_key: str | None = None
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_secret=os.getenv("APP_SECRET"),
            frontend_url=os.getenv("FRONTEND_URL", cls.frontend_url).rstrip("/"),
            currency=os.getenv("CURRENCY", cls.currency).lower(),
            mail_from=os.getenv("MAIL_FROM", cls.mail_from),
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
            smtp_host=os.getenv("SMTP_HOST"),
            smtp_port=int(os.getenv("SMTP_PORT", str(cls.smtp_port))),
            smtp_user=os.getenv("SMTP_USER"),
            smtp_password=os.getenv("SMTP_PASSWORD"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read on first use."""
    return Settings.from_env()
