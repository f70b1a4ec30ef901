"""Order repository port and in-memory adapter.

The creation event does not always carry the item collection (the
storefront stores items as a repeatable component that is only loaded on
request), so the pipeline re-reads the order with its items populated.
"""

from abc import ABC, abstractmethod

from invoicing.order.order import Order


class OrderRepository(ABC):
    """Abstract interface for loading orders together with their items."""

    @abstractmethod
    async def get_with_items(self, key: str) -> Order:
        """Return the order identified by ``key`` with ``items`` populated.

        Raises:
            LookupError: when no order matches ``key``.
        """
        ...


class InMemoryOrderRepository(OrderRepository):
    """Order repository backed by a dict, keyed by document id or order id."""

    def __init__(self, orders: list[Order] | None = None):
        self._orders: dict[str, Order] = {}
        self.lookups: list[str] = []
        for order in orders or []:
            self.add(order)

    def add(self, order: Order) -> None:
        self._orders[order.document_id or str(order.id)] = order

    async def get_with_items(self, key: str) -> Order:
        self.lookups.append(key)
        try:
            return self._orders[key]
        except KeyError:
            raise LookupError(f"Order {key} not found") from None
