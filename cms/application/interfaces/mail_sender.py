"""Abstract mail delivery interface (port)."""

from abc import ABC, abstractmethod


class MailSender(ABC):
    """Port for outbound email — implemented in the infrastructure layer."""

    @abstractmethod
    async def send(self, *, to: str, subject: str, body: str, reply_to: str | None = None) -> None:
        """Deliver a plain-text message. Raises MailDeliveryError on failure."""
        ...
