"""
notifications/services/reminders/dispatch.py

Thin wrapper around Django's mail framework. No retries here: a
failure is raised to the engine, which leaves the ledger untouched so
the next scheduled tick tries again.
"""

import logging

from django.conf import settings
from django.core.mail import BadHeaderError, EmailMultiAlternatives

from .exceptions import DispatchFailure

logger = logging.getLogger(__name__)


class EmailDispatcher:

    def __init__(self, from_email=None, connection=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.connection = connection

    def send(self, to, subject, html, text):
        """
        Send one multipart message (plain body + HTML alternative).
        Returns True, or raises DispatchFailure.
        """
        if not to:
            raise DispatchFailure("No recipient address")

        message = EmailMultiAlternatives(
            subject=subject,
            body=text,
            from_email=self.from_email,
            to=[to],
            connection=self.connection,
        )
        message.attach_alternative(html, "text/html")

        try:
            # EMAIL_TIMEOUT bounds the SMTP conversation
            sent = message.send(fail_silently=False)
        except (BadHeaderError, ValueError) as exc:
            raise DispatchFailure(f"Invalid message for {to}: {exc}") from exc
        except OSError as exc:
            raise DispatchFailure(f"Mail backend error for {to}: {exc}") from exc

        if not sent:
            raise DispatchFailure(f"Mail backend accepted no message for {to}")

        logger.debug("Dispatched %r to %s", subject, to)
        return True
