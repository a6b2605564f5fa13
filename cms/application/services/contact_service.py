"""Application service (use case) for the public contact form."""

import logging

from cms.application.interfaces import MailSender
from cms.domain.entities import ContactMessage
from cms.domain.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class ContactService:
    """Validates a visitor's message and forwards it to the site owner."""

    def __init__(self, mail_sender: MailSender, recipient: str):
        self._mail_sender = mail_sender
        self._recipient = recipient

    async def send(self, message: ContactMessage) -> bool:
        """Return True once the message is handed off.

        On failure ``message.errors`` explains why: either validation
        messages, or the mail server's error text.
        """
        if not message.validate():
            return False

        try:
            await self._mail_sender.send(
                to=self._recipient,
                subject=message.subject,
                body=message.message,
                reply_to=message.email,
            )
        except MailDeliveryError as exc:
            logger.warning("Contact message from %s not delivered: %s", message.email, exc)
            message.errors.append(str(exc))
            return False

        return True
