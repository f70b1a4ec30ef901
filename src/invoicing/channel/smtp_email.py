"""SMTP email adapter: delivers messages through the shop's mail relay.

smtplib is blocking, so each send runs in a worker thread and the event
loop keeps serving other orders while the relay responds.
"""

import asyncio
import smtplib
from email.message import EmailMessage as MimeMessage
from email.utils import make_msgid

import structlog

from invoicing.channel.email_port import EmailMessage, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Email adapter backed by an SMTP relay (STARTTLS when credentials are set)."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        reply_to: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username or ""
        self.reply_to = reply_to
        self.timeout = timeout

    def build_mime(self, message: EmailMessage) -> MimeMessage:
        mime = MimeMessage()
        mime["Message-ID"] = make_msgid()
        mime["From"] = self.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        if self.reply_to:
            mime["Reply-To"] = self.reply_to

        mime.set_content("This message requires an HTML capable mail client.")
        mime.add_alternative(message.html, subtype="html")
        for attachment in message.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            mime.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )
        return mime

    def _deliver(self, mime: MimeMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.username and self.password:
                smtp.starttls()
                smtp.login(self.username, self.password)
            smtp.send_message(mime)

    async def send(self, message: EmailMessage) -> dict:
        mime = self.build_mime(message)
        try:
            await asyncio.to_thread(self._deliver, mime)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery failed", to=message.to, host=self.host, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": mime["Message-ID"], "status": "sent"}
