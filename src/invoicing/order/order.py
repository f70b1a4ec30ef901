"""Order read model: the order as the invoicing pipeline sees it.

Every customer, delivery and item field is nullable because the storefront
only validates what it needs for checkout. Consumers must degrade missing
values to empty strings or zero rather than fail.
"""

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from shared.events.ordering import OrderCreated


class Size(BaseModel):
    width: int | None = None
    height: int | None = None
    depth: int | None = None


class Material(BaseModel):
    id: int | None = None
    title: str | None = None


class OrderItem(BaseModel):
    """One purchased line with model, quantity, price and optional attributes."""

    product_id: str | None = None
    model_name: str | None = None
    qty: float | None = None
    unit_price: float | None = None
    line_total: float | None = None
    size: Size | None = None
    body_material: Material | None = None
    front_material: Material | None = None
    product_img: str | None = None


class Order(BaseModel):
    id: int
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
    items: list[OrderItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_means_no_items(cls, value):
        return [] if value is None else value

    @property
    def customer_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @classmethod
    def from_event(cls, event: OrderCreated, items: list[OrderItem]) -> "Order":
        """Build the order from the creation event and its (possibly re-fetched) items."""
        return cls(
            id=event.order_id,
            document_id=event.document_id,
            first_name=event.first_name,
            last_name=event.last_name,
            email=event.email,
            phone=event.phone,
            delivery_method=event.delivery_method,
            delivery_address=event.delivery_address,
            payment_method=event.payment_method,
            prepayment_agreement=event.prepayment_agreement,
            comment=event.comment,
            items=items,
        )


_ITEMS_ADAPTER = TypeAdapter(list[OrderItem])


def parse_items(raw: str) -> list[OrderItem]:
    """Parse the JSON item list carried on an ``OrderCreated`` event."""
    return _ITEMS_ADAPTER.validate_json(raw) if raw.strip() else []
