"""Error taxonomy for the invoicing pipeline.

None of these escape the pipeline: each one is caught at the step that
raised it, logged, and turned into a halted run or a failed recipient.
"""


class InvoicingError(Exception):
    """Base class for invoicing pipeline failures."""


class SettingsLookupError(InvoicingError):
    """The shop settings store was unreachable or returned a malformed record."""


class RenderError(InvoicingError):
    """The invoice document could not be laid out or drawn."""


class DispatchError(InvoicingError):
    """A single recipient's email could not be handed to the transport."""

    def __init__(self, role: str, recipient: str, reason: str) -> None:
        super().__init__(f"{role} email to {recipient} failed: {reason}")
        self.role = role
        self.recipient = recipient
        self.reason = reason


class NoOperatorAddress(InvoicingError):
    """Neither the shop settings nor the environment provide an operator address."""
