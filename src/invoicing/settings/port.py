"""Shop settings port: abstract interface for the single-record shop settings store."""

from abc import ABC, abstractmethod


class ShopSettingsPort(ABC):
    """Abstract interface for reading the shop's settings record."""

    @abstractmethod
    async def find_first(self, fields: list[str]) -> dict | None:
        """Return the settings record restricted to ``fields``.

        Returns:
            dict with the requested keys, or None when no record exists
        """
        ...
