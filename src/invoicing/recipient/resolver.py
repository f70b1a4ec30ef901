"""Operator address resolution.

The shop operator configures the address that receives new-order
notifications in the shop settings record. When that record is missing,
malformed or the store cannot be reached, the address from the
``ORDERS_EMAIL`` environment variable is used instead.
"""

import structlog

from invoicing.exceptions import SettingsLookupError
from invoicing.settings.port import ShopSettingsPort

logger = structlog.get_logger(__name__)

ORDERS_EMAIL_FIELD = "orders_email"


async def _configured_address(settings_store: ShopSettingsPort) -> str:
    try:
        record = await settings_store.find_first(fields=[ORDERS_EMAIL_FIELD])
    except Exception as exc:
        raise SettingsLookupError(f"Shop settings unavailable: {exc}") from exc

    if record is None:
        return ""
    if not isinstance(record, dict):
        raise SettingsLookupError(f"Malformed shop settings record: {type(record).__name__}")

    address = record.get(ORDERS_EMAIL_FIELD)
    if address is None:
        return ""
    if not isinstance(address, str):
        raise SettingsLookupError(f"Malformed {ORDERS_EMAIL_FIELD}: {address!r}")
    return address.strip()


async def resolve_operator_email(settings_store: ShopSettingsPort, fallback: str | None = "") -> str:
    """Return the operator's notification address, or "" when none is configured.

    Never raises; lookup failures are logged and resolved to ``fallback``.
    """
    fallback = (fallback or "").strip()

    try:
        address = await _configured_address(settings_store)
    except SettingsLookupError as exc:
        logger.warning(
            "Cannot read operator address from shop settings, using fallback",
            error=str(exc),
            has_fallback=bool(fallback),
        )
        return fallback

    if not address:
        logger.info("No operator address in shop settings, using fallback", has_fallback=bool(fallback))
        return fallback

    return address
