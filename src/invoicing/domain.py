"""Invoicing bounded context: invoice PDF and new-order emails.

Consumes OrderCreated events from the Ordering domain, renders the order
as a PDF invoice and mails it to the shop operator and the customer.
This module is the composition root: it wires the configured adapters
into an ``InvoicingPipeline``.
"""

from invoicing.channel import get_channel
from invoicing.config import InvoicingConfig
from invoicing.order.repository import InMemoryOrderRepository, OrderRepository
from invoicing.pipeline.ordering_events import OrderingEventsHandler
from invoicing.pipeline.pipeline import InvoicingPipeline
from invoicing.settings.fake_settings import FakeShopSettings
from invoicing.settings.port import ShopSettingsPort
from invoicing.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)


def build_pipeline(
    config: InvoicingConfig | None = None,
    order_repository: OrderRepository | None = None,
    settings_store: ShopSettingsPort | None = None,
) -> InvoicingPipeline:
    """Assemble the pipeline from configuration and the given stores.

    Stores that are not supplied default to the in-memory adapters.
    """
    config = config or InvoicingConfig.from_env()
    pipeline = InvoicingPipeline(
        order_repository=order_repository or InMemoryOrderRepository(),
        settings_store=settings_store or FakeShopSettings(),
        mailer=get_channel(config),
        fallback_email=config.orders_email,
        fonts_dir=config.fonts_dir,
    )
    logger.debug(
        "Invoicing pipeline assembled",
        mail_adapter=config.mail_adapter,
        fonts_dir=str(config.fonts_dir),
        has_fallback_email=bool(config.orders_email),
    )
    return pipeline


def build_handler(config: InvoicingConfig | None = None, **stores) -> OrderingEventsHandler:
    """Entry point wired into the order backend's after-create hook."""
    return OrderingEventsHandler(build_pipeline(config, **stores))
