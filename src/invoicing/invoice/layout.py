"""Invoice layout: places the header block, item table and total on A4 pages.

Layout is computed before anything is drawn so that every row's height is
known when deciding whether it still fits on the current page. Positions
are measured top-down from the page's top edge; the renderer flips them
into PDF coordinates.

Table rows grow with their content: each cell's text is wrapped at the
cell's inner width and the tallest cell decides the row height. A row that
does not fit below the cursor starts a new page. The table header row is
placed once, where the table starts, and is not repeated.
"""

from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth

from invoicing.invoice.fonts import FALLBACK_FONTS, FontSet
from invoicing.invoice.totals import format_money, line_total, order_total
from invoicing.order.order import Order, OrderItem

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 40
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

# Model, Qty, Unit price, Amount; Parameters takes the rest of the line
COLUMN_WIDTHS = (180, 40, 90, 90, CONTENT_WIDTH - 400)
CELL_PADDING_X = 6
CELL_PADDING_Y = 6
LINE_SPACING = 1.2

TITLE_SIZE = 22
BODY_SIZE = 11
HEADING_SIZE = 14
TABLE_SIZE = 10
TOTAL_SIZE = 13

TABLE_HEADER = ("Model", "Qty", "Unit price", "Amount", "Parameters")


# ---------------------------------------------------------------------------
# Layout model
# ---------------------------------------------------------------------------
@dataclass
class TextLine:
    text: str
    x: float
    y: float
    font: str
    size: float


@dataclass
class Cell:
    text: str
    x: float
    width: float
    lines: list[str]


@dataclass
class Row:
    cells: list[Cell]
    y: float
    height: float
    font: str
    size: float
    is_header: bool = False


@dataclass
class Page:
    number: int
    cursor: float = MARGIN
    lines: list[TextLine] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return not self.lines and not self.rows


@dataclass
class InvoiceLayout:
    order_id: int
    fonts: FontSet
    total: float
    pages: list[Page]
    total_line: TextLine | None = None

    @property
    def rows(self) -> list[Row]:
        return [row for page in self.pages for row in page.rows]

    @property
    def header_rows(self) -> list[Row]:
        return [row for row in self.rows if row.is_header]

    @property
    def data_rows(self) -> list[Row]:
        return [row for row in self.rows if not row.is_header]


# ---------------------------------------------------------------------------
# Measurement and page flow
# ---------------------------------------------------------------------------
class TextMeasurer:
    """Wraps text into lines using the font's glyph widths.

    Lines break at ordinary spaces and newlines only, so no-break spaces
    keep money amounts and their suffix together. A word that is wider
    than the available width on its own is broken between characters.
    """

    def measure(self, text: str, font: str, size: float) -> float:
        return stringWidth(text, font, size)

    def _break_word(self, word: str, font: str, size: float, width: float) -> list[str]:
        pieces = []
        current = ""
        for char in word:
            # a line always takes at least one character
            if current and self.measure(current + char, font, size) > width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces

    def _wrap_paragraph(self, paragraph: str, font: str, size: float, width: float) -> list[str]:
        lines = []
        current = ""
        for word in paragraph.split(" "):
            if not word:
                continue
            candidate = f"{current} {word}" if current else word
            if self.measure(candidate, font, size) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if self.measure(word, font, size) <= width:
                current = word
            else:
                *full, current = self._break_word(word, font, size, width)
                lines.extend(full)
        if current:
            lines.append(current)
        return lines

    def wrap(self, text: str, font: str, size: float, width: float) -> list[str]:
        lines = []
        for paragraph in text.replace("\t", " ").splitlines():
            lines.extend(self._wrap_paragraph(paragraph, font, size, width))
        # An empty cell still occupies one line
        return lines or [""]

    def line_height(self, size: float) -> float:
        return size * LINE_SPACING


class PageFlow:
    """Tracks the vertical cursor and opens new pages as content overflows."""

    def __init__(self):
        self.pages = [Page(number=1)]

    @property
    def page(self) -> Page:
        return self.pages[-1]

    @property
    def bottom(self) -> float:
        return PAGE_HEIGHT - MARGIN

    def reserve(self, height: float) -> Page:
        """Return the page on which a block of ``height`` should be placed."""
        page = self.page
        if page.cursor + height > self.bottom and not page.is_blank:
            page = Page(number=len(self.pages) + 1)
            self.pages.append(page)
        return page

    def skip(self, height: float) -> None:
        self.page.cursor = min(self.page.cursor + height, self.bottom)


# ---------------------------------------------------------------------------
# Cell content
# ---------------------------------------------------------------------------
def header_fields(order: Order) -> list[tuple[str, str]]:
    """Labelled customer fields printed above the table.

    Name, email and phone are always printed; delivery and payment details
    only when the customer provided them.
    """
    fields = [
        ("Name", order.customer_name),
        ("Email", order.email or ""),
        ("Phone", order.phone or ""),
    ]
    if order.delivery_method:
        fields.append(("Delivery", order.delivery_method))
    if order.delivery_address:
        fields.append(("Address", order.delivery_address))
    if order.payment_method:
        fields.append(("Payment", order.payment_method))
    if order.prepayment_agreement is not None:
        fields.append(("Prepayment", "yes" if order.prepayment_agreement else "no"))
    return fields


def item_parameters(item: OrderItem) -> str:
    """Size and material summary, e.g. ``120W×200H×60D; Body: Oak``."""
    params = []
    if item.size:
        dimensions = [
            f"{value}{suffix}"
            for value, suffix in (
                (item.size.width, "W"),
                (item.size.height, "H"),
                (item.size.depth, "D"),
            )
            if value
        ]
        if dimensions:
            params.append("×".join(dimensions))
    if item.body_material and item.body_material.title:
        params.append(f"Body: {item.body_material.title}")
    if item.front_material and item.front_material.title:
        params.append(f"Front: {item.front_material.title}")
    return "; ".join(params)


def _format_quantity(qty: float) -> str:
    return str(int(qty)) if float(qty).is_integer() else str(qty)


def item_cells(item: OrderItem) -> tuple[str, ...]:
    qty = item.qty or 0
    return (
        item.model_name or "",
        _format_quantity(qty) if qty else "",
        format_money(item.unit_price or 0),
        format_money(line_total(item)),
        item_parameters(item),
    )


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------
def _place_text(flow: PageFlow, measurer: TextMeasurer, text: str, font: str, size: float) -> list[TextLine]:
    placed = []
    line_height = measurer.line_height(size)
    for line in measurer.wrap(text, font, size, CONTENT_WIDTH):
        page = flow.reserve(line_height)
        placed.append(TextLine(text=line, x=MARGIN, y=page.cursor, font=font, size=size))
        page.lines.append(placed[-1])
        page.cursor += line_height
    return placed


def _place_row(
    flow: PageFlow,
    measurer: TextMeasurer,
    texts: tuple[str, ...],
    font: str,
    is_header: bool = False,
) -> Row:
    wrapped = [
        measurer.wrap(text, font, TABLE_SIZE, width - 2 * CELL_PADDING_X)
        for text, width in zip(texts, COLUMN_WIDTHS, strict=True)
    ]
    height = max(len(lines) for lines in wrapped) * measurer.line_height(TABLE_SIZE) + 2 * CELL_PADDING_Y

    page = flow.reserve(height)

    cells = []
    x = MARGIN
    for text, width, lines in zip(texts, COLUMN_WIDTHS, wrapped, strict=True):
        cells.append(Cell(text=text, x=x, width=width, lines=lines))
        x += width

    row = Row(cells=cells, y=page.cursor, height=height, font=font, size=TABLE_SIZE, is_header=is_header)
    page.rows.append(row)
    page.cursor += height
    return row


def layout_invoice(
    order: Order,
    fonts: FontSet = FALLBACK_FONTS,
    measurer: TextMeasurer | None = None,
) -> InvoiceLayout:
    """Compute the pages of the invoice for ``order``."""
    measurer = measurer or TextMeasurer()
    flow = PageFlow()

    _place_text(flow, measurer, f"Order #{order.id}", fonts.bold, TITLE_SIZE)
    flow.skip(0.8 * measurer.line_height(TITLE_SIZE))

    for label, value in header_fields(order):
        _place_text(flow, measurer, f"{label}: {value}", fonts.regular, BODY_SIZE)
    if order.comment:
        flow.skip(0.3 * measurer.line_height(BODY_SIZE))
        _place_text(flow, measurer, f"Comment: {order.comment}", fonts.regular, BODY_SIZE)

    flow.skip(1.2 * measurer.line_height(BODY_SIZE))
    _place_text(flow, measurer, "Items", fonts.bold, HEADING_SIZE)
    flow.skip(0.4 * measurer.line_height(HEADING_SIZE))

    _place_row(flow, measurer, TABLE_HEADER, fonts.bold, is_header=True)
    for item in order.items:
        _place_row(flow, measurer, item_cells(item), fonts.regular)

    total = order_total(order.items)
    flow.skip(0.8 * measurer.line_height(TABLE_SIZE))
    total_lines = _place_text(flow, measurer, f"Total: {format_money(total)}", fonts.bold, TOTAL_SIZE)

    return InvoiceLayout(
        order_id=order.id,
        fonts=fonts,
        total=total,
        pages=flow.pages,
        total_line=total_lines[-1],
    )
