"""Fake email adapter: records sent emails for testing."""

from uuid import uuid4

from invoicing.channel.email_port import EmailMessage, EmailPort


class FakeEmailAdapter(EmailPort):
    """Email adapter that records messages in memory for test assertions.

    Failures can be configured for every recipient or only for selected
    addresses, and either reported as a failed result or raised.
    """

    def __init__(self):
        self.sent_emails: list[EmailMessage] = []
        self.attempts: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.failing_recipients: set[str] = set()
        self.raise_on_failure = False

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        failing_recipients: set[str] | None = None,
        raise_on_failure: bool = False,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failing_recipients = set(failing_recipients or ())
        self.raise_on_failure = raise_on_failure

    def _fails_for(self, to: str) -> bool:
        return not self.should_succeed or to in self.failing_recipients

    async def send(self, message: EmailMessage) -> dict:
        self.attempts.append(message.to)

        if self._fails_for(message.to):
            if self.raise_on_failure:
                raise ConnectionError(self.failure_reason)
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        self.sent_emails.append(message)
        return {"message_id": f"email-{uuid4().hex[:12]}", "status": "sent"}

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.attempts.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.failing_recipients = set()
        self.raise_on_failure = False
