import json
import shutil
from pathlib import Path

import pytest
import reportlab
from invoicing.channel.fake_email import FakeEmailAdapter
from invoicing.order.order import Order
from invoicing.order.repository import InMemoryOrderRepository
from invoicing.pipeline.pipeline import InvoicingPipeline
from invoicing.settings.fake_settings import FakeShopSettings
from shared.events.ordering import OrderCreated


@pytest.fixture()
def mailer():
    adapter = FakeEmailAdapter()
    yield adapter
    adapter.reset()


@pytest.fixture()
def settings_store():
    return FakeShopSettings(record={"orders_email": "shop@x.com"})


@pytest.fixture()
def order_repository():
    return InMemoryOrderRepository()


@pytest.fixture()
def pipeline(order_repository, settings_store, mailer, tmp_path):
    return InvoicingPipeline(
        order_repository=order_repository,
        settings_store=settings_store,
        mailer=mailer,
        fallback_email="",
        fonts_dir=tmp_path / "no-fonts",
    )


def _make_order(order_id=42, items=None, **fields) -> Order:
    return Order(id=order_id, items=items or [], **fields)


def _make_event(order_id=42, items=None, **fields) -> OrderCreated:
    return OrderCreated(
        order_id=order_id,
        items=None if items is None else json.dumps(items),
        **fields,
    )


@pytest.fixture()
def make_order():
    return _make_order


@pytest.fixture()
def make_event():
    """Build an OrderCreated event; ``items=None`` leaves items for re-fetch."""
    return _make_event


@pytest.fixture(scope="session")
def embedded_fonts_dir(tmp_path_factory):
    """A fonts directory populated from the TrueType fonts bundled with reportlab.

    Session scoped: reportlab keeps registered fonts for the whole process.
    """
    bundled = Path(reportlab.__file__).parent / "fonts"
    fonts_dir = tmp_path_factory.mktemp("fonts")
    shutil.copyfile(bundled / "Vera.ttf", fonts_dir / "NotoSans-Regular.ttf")
    shutil.copyfile(bundled / "VeraBd.ttf", fonts_dir / "NotoSans-Bold.ttf")
    return fonts_dir
