"""Email channel port: abstract interface for email dispatch."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
