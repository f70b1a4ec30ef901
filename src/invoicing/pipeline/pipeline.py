"""Invoicing pipeline: one run per created order.

State Machine:
    RECEIVED → ENRICHED → RENDERED → RESOLVED → DISPATCHED → DONE
    any non-terminal stage → HALTED

A failure at any step halts the remaining steps of that run. The run
itself always completes: errors are logged once and recorded on the
returned ``PipelineRun``, never raised, because the order has already
been persisted by the time the pipeline starts.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

from invoicing.channel.email_port import EmailPort
from invoicing.exceptions import NoOperatorAddress
from invoicing.invoice.renderer import render_invoice
from invoicing.notification.dispatch import DispatchReport, NotificationDispatcher
from invoicing.order.order import Order, OrderItem, parse_items
from invoicing.order.repository import OrderRepository
from invoicing.recipient.resolver import resolve_operator_email
from invoicing.settings.port import ShopSettingsPort
from shared.events.ordering import OrderCreated

logger = structlog.get_logger(__name__)


class PipelineStage(Enum):
    RECEIVED = "Received"
    ENRICHED = "Enriched"
    RENDERED = "Rendered"
    RESOLVED = "Resolved"
    DISPATCHED = "Dispatched"
    DONE = "Done"
    HALTED = "Halted"


_VALID_TRANSITIONS = {
    PipelineStage.RECEIVED: {PipelineStage.ENRICHED, PipelineStage.HALTED},
    PipelineStage.ENRICHED: {PipelineStage.RENDERED, PipelineStage.HALTED},
    PipelineStage.RENDERED: {PipelineStage.RESOLVED, PipelineStage.HALTED},
    PipelineStage.RESOLVED: {PipelineStage.DISPATCHED, PipelineStage.HALTED},
    PipelineStage.DISPATCHED: {PipelineStage.DONE, PipelineStage.HALTED},
    PipelineStage.DONE: set(),  # Terminal
    PipelineStage.HALTED: set(),  # Terminal
}


@dataclass
class PipelineRun:
    """Outcome of one pipeline run, built up as the run progresses."""

    order_id: int
    stage: PipelineStage = PipelineStage.RECEIVED
    history: list[PipelineStage] = field(default_factory=lambda: [PipelineStage.RECEIVED])
    order: Order | None = None
    document: bytes | None = None
    operator_email: str = ""
    dispatch: DispatchReport | None = None
    error: Exception | None = None
    halted_at: PipelineStage | None = None

    def advance(self, target: PipelineStage) -> None:
        if target not in _VALID_TRANSITIONS[self.stage]:
            raise ValueError(f"Cannot transition from {self.stage.value} to {target.value}")
        self.stage = target
        self.history.append(target)

    def halt(self, error: Exception) -> None:
        self.halted_at = self.stage
        self.error = error
        self.advance(PipelineStage.HALTED)

    @property
    def completed(self) -> bool:
        return self.stage == PipelineStage.DONE


class InvoicingPipeline:
    """Renders and mails the invoice for a newly created order.

    All collaborators are injected so concurrent runs share nothing but
    the adapters themselves.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        settings_store: ShopSettingsPort,
        mailer: EmailPort,
        fallback_email: str = "",
        fonts_dir: Path | str | None = None,
    ):
        self.order_repository = order_repository
        self.settings_store = settings_store
        self.dispatcher = NotificationDispatcher(mailer)
        self.fallback_email = fallback_email
        self.fonts_dir = fonts_dir

    async def _load_items(self, event: OrderCreated) -> list[OrderItem]:
        if event.items is not None:
            return parse_items(event.items)

        key = event.document_id or str(event.order_id)
        full = await self.order_repository.get_with_items(key)
        return full.items

    async def _execute(self, event: OrderCreated, run: PipelineRun) -> None:
        run.order = Order.from_event(event, await self._load_items(event))
        run.advance(PipelineStage.ENRICHED)
        logger.info("Order items loaded", items=len(run.order.items))

        run.document = render_invoice(run.order, self.fonts_dir)
        run.advance(PipelineStage.RENDERED)

        run.operator_email = await resolve_operator_email(self.settings_store, self.fallback_email)
        if not run.operator_email:
            raise NoOperatorAddress(f"No operator address configured for order {event.order_id}")
        run.advance(PipelineStage.RESOLVED)

        run.dispatch = await self.dispatcher.dispatch(run.order, run.document, run.operator_email)
        run.advance(PipelineStage.DISPATCHED)

    async def run(self, event: OrderCreated) -> PipelineRun:
        """Execute the pipeline for ``event``; never raises."""
        run = PipelineRun(order_id=event.order_id)

        with structlog.contextvars.bound_contextvars(order_id=event.order_id):
            try:
                await self._execute(event, run)
            except NoOperatorAddress as exc:
                logger.warning("No operator address, invoice not sent", error=str(exc))
                run.halt(exc)
                return run
            except Exception as exc:
                logger.error(
                    "Invoice pipeline halted",
                    stage=run.stage.value,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                run.halt(exc)
                return run

            run.advance(PipelineStage.DONE)
            logger.info(
                "Invoice pipeline completed",
                sent=len(run.dispatch.sent),
                failed=len(run.dispatch.failed),
            )
        return run
