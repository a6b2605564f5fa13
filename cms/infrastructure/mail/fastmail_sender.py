"""SMTP mail delivery through fastapi-mail."""

import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from fastapi_mail.errors import ConnectionErrors
from pydantic import SecretStr

from cms.application.interfaces import MailSender
from cms.config import Settings
from cms.domain.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


def build_connection_config(settings: Settings) -> ConnectionConfig:
    """Translate application settings into a fastapi-mail connection config."""
    return ConnectionConfig(
        MAIL_USERNAME=settings.smtp_username,
        MAIL_PASSWORD=SecretStr(settings.smtp_password),
        MAIL_FROM=settings.mail_from,
        MAIL_PORT=settings.smtp_port,
        MAIL_SERVER=settings.smtp_host,
        MAIL_STARTTLS=settings.smtp_starttls,
        MAIL_SSL_TLS=settings.smtp_ssl_tls,
        USE_CREDENTIALS=bool(settings.smtp_username),
        VALIDATE_CERTS=True,
    )


class FastMailSender(MailSender):
    """Implements the MailSender port on top of ``fastapi_mail.FastMail``."""

    def __init__(self, config: ConnectionConfig):
        self._mailer = FastMail(config)

    async def send(self, *, to: str, subject: str, body: str, reply_to: str | None = None) -> None:
        message = MessageSchema(
            subject=subject,
            recipients=[to],
            body=body,
            subtype=MessageType.plain,
            reply_to=[reply_to] if reply_to else [],
        )
        try:
            await self._mailer.send_message(message)
        except ConnectionErrors as exc:
            logger.error("SMTP delivery to %s failed: %s", to, exc)
            raise MailDeliveryError(str(exc)) from exc

        logger.info("Sent mail to %s (subject=%r)", to, subject)
