"""Outbound mail port used by the password reset flow.

SickFits sends a single kind of mail today, the reset link. Whatever adapter
sits behind this port, the reset flow never lets a delivery problem reach the
shopper: it logs and acknowledges either way.
"""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Delivers one message to one recipient."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Deliver a plain-text message, with an optional HTML alternative.

        Returns a dict carrying ``message_id``, ``status`` ("sent" or
        "failed") and, for failures, ``error``. Adapters may raise instead on
        transport problems.
        """
        ...
