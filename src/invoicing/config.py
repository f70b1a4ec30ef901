"""Runtime configuration for the invoicing pipeline.

Everything is read from environment variables; defaults mirror the
shop's mail relay setup so a development checkout works without any
variables set (using the fake mail adapter).
"""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class InvoicingConfig:
    """Settings consumed by the composition root and the mail adapters."""

    orders_email: str = ""
    fonts_dir: Path = Path("assets") / "fonts"
    mail_adapter: str = "fake"
    smtp_host: str = "smtp-relay.brevo.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    email_from: str | None = None
    email_reply_to: str | None = None

    @classmethod
    def from_env(cls) -> "InvoicingConfig":
        """Build the configuration from the process environment."""
        return cls(
            orders_email=os.environ.get("ORDERS_EMAIL", "").strip(),
            fonts_dir=Path(os.environ.get("INVOICE_FONTS_DIR", str(Path.cwd() / "assets" / "fonts"))),
            mail_adapter=os.environ.get("MAIL_ADAPTER", "fake"),
            smtp_host=os.environ.get("SMTP_HOST", "smtp-relay.brevo.com"),
            smtp_port=int(os.environ.get("SMTP_PORT", "587")),
            smtp_user=os.environ.get("SMTP_USER"),
            smtp_password=os.environ.get("SMTP_PASS"),
            email_from=os.environ.get("EMAIL_FROM"),
            email_reply_to=os.environ.get("EMAIL_REPLY_TO"),
        )
