"""Email channel registry: pluggable mail transport.

Provides singleton access to the email adapter. Uses the fake adapter by
default; the SMTP relay adapter is selected with ``MAIL_ADAPTER=smtp``.
"""

from invoicing.channel.email_port import EmailPort
from invoicing.config import InvoicingConfig

_channel_instance: EmailPort | None = None


def get_channel(config: InvoicingConfig | None = None) -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _channel_instance
    if _channel_instance is None:
        config = config or InvoicingConfig.from_env()
        if config.mail_adapter == "fake":
            from invoicing.channel.fake_email import FakeEmailAdapter

            _channel_instance = FakeEmailAdapter()
        elif config.mail_adapter == "smtp":
            from invoicing.channel.smtp_email import SmtpEmailAdapter

            _channel_instance = SmtpEmailAdapter(
                host=config.smtp_host,
                port=config.smtp_port,
                username=config.smtp_user,
                password=config.smtp_password,
                sender=config.email_from,
                reply_to=config.email_reply_to,
            )
        else:
            raise ValueError(f"Unknown mail adapter: {config.mail_adapter}")

    return _channel_instance


def reset_channels():
    """Reset the channel singleton (useful for testing)."""
    global _channel_instance
    _channel_instance = None
