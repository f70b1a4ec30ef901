"""Invoice rendering: draws a computed layout into PDF bytes.

Rendering is all-or-nothing: any failure while measuring, laying out or
drawing surfaces as a single ``RenderError`` and no partial document is
returned. Only the font fallback is tolerated silently.
"""

import io
from pathlib import Path

import structlog
from reportlab.pdfgen import canvas

from invoicing.exceptions import RenderError
from invoicing.invoice.fonts import register_fonts
from invoicing.invoice.layout import (
    CELL_PADDING_X,
    CELL_PADDING_Y,
    LINE_SPACING,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    InvoiceLayout,
    Row,
    layout_invoice,
)
from invoicing.order.order import Order

logger = structlog.get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def _baseline(top: float, size: float) -> float:
    """PDF y coordinate of the baseline for text whose line box starts at ``top``."""
    return PAGE_HEIGHT - top - size


def _paint_row(pdf: canvas.Canvas, row: Row) -> None:
    line_height = row.size * LINE_SPACING
    pdf.setFont(row.font, row.size)
    for cell in row.cells:
        pdf.rect(cell.x, PAGE_HEIGHT - row.y - row.height, cell.width, row.height, stroke=1, fill=0)
        top = row.y + CELL_PADDING_Y
        for index, line in enumerate(cell.lines):
            pdf.drawString(cell.x + CELL_PADDING_X, _baseline(top + index * line_height, row.size), line)


def paint(layout: InvoiceLayout) -> bytes:
    """Draw ``layout`` page by page and return the finished PDF."""
    buffer = io.BytesIO()
    # invariant mode pins the creation date and document id so output is reproducible
    pdf = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT), invariant=1)
    pdf.setTitle(f"Order #{layout.order_id}")

    for page in layout.pages:
        for line in page.lines:
            pdf.setFont(line.font, line.size)
            pdf.drawString(line.x, _baseline(line.y, line.size), line.text)
        for row in page.rows:
            _paint_row(pdf, row)
        pdf.showPage()

    pdf.save()
    return buffer.getvalue()


def render_invoice(order: Order, fonts_dir: Path | str | None = None) -> bytes:
    """Render the invoice PDF for ``order``.

    Args:
        order: The order with its items loaded.
        fonts_dir: Directory holding the Noto Sans font files. Helvetica is
            used when it is missing or unusable.

    Raises:
        RenderError: when layout or drawing fails.
    """
    fonts = register_fonts(fonts_dir)

    try:
        layout = layout_invoice(order, fonts)
        document = paint(layout)
    except Exception as exc:
        raise RenderError(f"Could not render invoice for order {order.id}: {exc}") from exc

    logger.info(
        "Invoice rendered",
        order_id=order.id,
        items=len(order.items),
        pages=len(layout.pages),
        embedded_fonts=fonts.embedded,
        size=len(document),
    )
    return document
