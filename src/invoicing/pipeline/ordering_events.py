"""Inbound cross-domain event handler: Invoicing reacts to Order events.

Listens for OrderCreated and runs the invoicing pipeline. The order is
already persisted when the event arrives, so this handler must never
raise back into the order creation flow.
"""

import structlog

from invoicing.pipeline.pipeline import InvoicingPipeline, PipelineRun
from shared.events.ordering import OrderCreated

logger = structlog.get_logger(__name__)


class OrderingEventsHandler:
    """Reacts to Ordering domain events to send the invoice PDF."""

    def __init__(self, pipeline: InvoicingPipeline):
        self.pipeline = pipeline

    async def on_order_created(self, event: OrderCreated) -> PipelineRun | None:
        """Render and mail the invoice when an order is placed."""
        try:
            return await self.pipeline.run(event)
        except Exception:
            logger.exception("Unexpected failure in invoice pipeline", order_id=event.order_id)
            return None
