"""Cross-domain event contracts for Ordering domain events.

These classes define the event shape for consumption by other domains
(e.g., the Invoicing domain to render and mail an invoice when an order
is created). The ordering backend publishes them after the order record
has been persisted, so consumers must never fail the order creation.
"""

from datetime import datetime

from pydantic import BaseModel


class OrderCreated(BaseModel):
    """A new order was created by the storefront checkout.

    Consumed by the Invoicing domain to send the invoice PDF to the shop
    operator and to the customer.
    """

    order_id: int
    document_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    delivery_method: str | None = None
    delivery_address: str | None = None
    payment_method: str | None = None
    prepayment_agreement: bool | None = None
    comment: str | None = None
    items: str | None = None  # JSON list of item dicts; None when not populated
    created_at: datetime | None = None
