"""Notification dispatch: mails the invoice to the operator and the customer.

Each recipient is attempted on its own: a transport failure for the
operator does not stop the customer's acknowledgement and vice versa.
Failures are logged with the recipient's role and address and collected
in the returned report; nothing is raised to the caller.
"""

from dataclasses import dataclass, field

import structlog

from invoicing.channel.email_port import Attachment, EmailMessage, EmailPort
from invoicing.exceptions import DispatchError
from invoicing.invoice.renderer import PDF_CONTENT_TYPE
from invoicing.notification.templates import RecipientRole, get_template
from invoicing.order.order import Order

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RecipientResult:
    role: str
    to: str
    status: str
    message_id: str | None = None
    error: str | None = None


@dataclass
class DispatchReport:
    results: list[RecipientResult] = field(default_factory=list)

    @property
    def sent(self) -> list[RecipientResult]:
        return [result for result in self.results if result.status == "sent"]

    @property
    def failed(self) -> list[RecipientResult]:
        return [result for result in self.results if result.status != "sent"]


def invoice_attachment(order: Order, document: bytes) -> Attachment:
    return Attachment(
        filename=f"order-{order.id}.pdf",
        content=document,
        content_type=PDF_CONTENT_TYPE,
    )


class NotificationDispatcher:
    """Sends the rendered invoice through an email adapter."""

    def __init__(self, mailer: EmailPort):
        self.mailer = mailer

    async def _send(self, role: str, to: str, order: Order, attachment: Attachment) -> RecipientResult:
        rendered = get_template(role).render({"order_id": order.id})
        message = EmailMessage(
            to=to,
            subject=rendered["subject"],
            html=rendered["html"],
            attachments=(attachment,),
        )

        try:
            result = await self.mailer.send(message)
            if result.get("status") != "sent":
                raise DispatchError(role, to, result.get("error") or "Unknown dispatch error")
        except Exception as exc:
            error = exc if isinstance(exc, DispatchError) else DispatchError(role, to, str(exc))
            logger.error(
                "Invoice email failed",
                order_id=order.id,
                role=role,
                to=to,
                error=error.reason,
            )
            return RecipientResult(role=role, to=to, status="failed", error=error.reason)

        logger.info("Invoice email sent", order_id=order.id, role=role, to=to)
        return RecipientResult(role=role, to=to, status="sent", message_id=result.get("message_id"))

    async def dispatch(self, order: Order, document: bytes, operator_email: str) -> DispatchReport:
        """Mail ``document`` to the operator and, when known, to the customer."""
        report = DispatchReport()

        if not operator_email:
            logger.warning("No operator address, skipping invoice emails", order_id=order.id)
            return report

        attachment = invoice_attachment(order, document)
        recipients = [(RecipientRole.OPERATOR.value, operator_email)]
        customer_email = (order.email or "").strip()
        if customer_email:
            recipients.append((RecipientRole.CUSTOMER.value, customer_email))

        for role, to in recipients:
            report.results.append(await self._send(role, to, order, attachment))

        return report
