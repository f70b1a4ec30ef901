"""Fake shop settings store: serves a configurable record for testing."""

from invoicing.settings.port import ShopSettingsPort


class FakeShopSettings(ShopSettingsPort):
    """Settings store that returns an in-memory record or a configured failure."""

    def __init__(self, record: dict | None = None):
        self.record = record
        self.should_succeed = True
        self.failure_reason = "Settings store unreachable"
        self.calls: list[list[str]] = []

    def configure(self, should_succeed: bool = True, failure_reason: str = "Settings store unreachable"):
        """Configure the fake store behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def find_first(self, fields: list[str]) -> dict | None:
        self.calls.append(list(fields))
        if not self.should_succeed:
            raise ConnectionError(self.failure_reason)
        if self.record is None:
            return None
        return {key: self.record.get(key) for key in fields}
