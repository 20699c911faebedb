"""Invoice PDF rendering with fpdf2.

Fixed A4 layout in millimetres: header, invoice number and date, issuer and
client blocks, one row per project, total, and payment instructions.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from fpdf import FPDF

from src.studio.models.enums import Brand

CENTS = Decimal("0.01")
TITLE_MAX_CHARS = 30
ROW_HEIGHT = 10
PAGE_BOTTOM = 250
PAGE_TOP = 30
PAGE_HEIGHT = 287

# Column x positions
LEFT = 20
TYPE_COL = 100
AMOUNT_COL = 150
RIGHT_BLOCK = 120
TOTAL_COL = 140
RIGHT_EDGE = 190


def to_cents(amount: Decimal) -> Decimal:
    """Round a money amount to two fraction digits, half up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    return f"${to_cents(amount):.2f}"


def format_invoice_number(number: int) -> str:
    """Zero-pad an invoice number to three digits (``7`` -> ``007``)."""
    return f"{number:03d}"


def invoice_file_name(brand: Brand, issued_on: date) -> str:
    """Deterministic export name, e.g. ``WAMI_LIVE_Invoice_3-05-25.pdf``."""
    return f"{brand.file_stem}_Invoice_{issued_on.month}-{issued_on:%d-%y}.pdf"


def truncate_title(title: str, limit: int = TITLE_MAX_CHARS) -> str:
    if len(title) > limit:
        return title[:limit] + "..."
    return title


def _latin1(text: str) -> str:
    # Core PDF fonts only cover Latin-1
    return text.encode("latin-1", "replace").decode("latin-1")


@dataclass(frozen=True)
class InvoiceLine:
    title: str
    type: str
    price: Decimal


@dataclass(frozen=True)
class InvoiceDocument:
    """Everything printed on one invoice."""

    invoice_number: str
    brand: Brand
    issued_on: date
    lines: Sequence[InvoiceLine]
    issuer_lines: Sequence[str] = field(default_factory=tuple)
    payment_lines: Sequence[str] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return sum((line.price for line in self.lines), Decimal("0"))

    @property
    def file_name(self) -> str:
        return invoice_file_name(self.brand, self.issued_on)


class InvoicePDF:
    """Draws an ``InvoiceDocument`` onto fpdf2 pages."""

    def __init__(self, document: InvoiceDocument):
        self.document = document
        self.pdf = FPDF(orientation="P", unit="mm", format="A4")
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_title(f"Invoice {document.invoice_number}")
        self.pdf.set_creator("Studio Ops Dashboard")

    def _text(self, x: float, y: float, text: str, style: str = "", size: int = 12) -> None:
        self.pdf.set_font("helvetica", style=style, size=size)
        self.pdf.text(x, y, _latin1(text))

    def _header(self) -> None:
        doc = self.document
        self._text(LEFT, 30, "INVOICE", style="B", size=20)
        self._text(LEFT, 45, f"Invoice #: {doc.invoice_number}")
        self._text(LEFT, 55, f"Date: {doc.issued_on:%m/%d/%Y}")

        self._text(LEFT, 75, "FROM:", style="B")
        y = 85
        for line in doc.issuer_lines:
            self._text(LEFT, y, line)
            y += 10

        self._text(RIGHT_BLOCK, 75, "BILL TO:", style="B")
        self._text(RIGHT_BLOCK, 85, doc.brand.client_name)

    def _rows(self, y: float) -> float:
        self._text(LEFT, y, "Description", style="B")
        self._text(TYPE_COL, y, "Type", style="B")
        self._text(AMOUNT_COL, y, "Amount", style="B")
        self.pdf.line(LEFT, y + 5, RIGHT_EDGE, y + 5)
        y += 15

        for line in self.document.lines:
            self._text(LEFT, y, truncate_title(line.title))
            self._text(TYPE_COL, y, line.type)
            self._text(AMOUNT_COL, y, format_money(line.price))
            y += ROW_HEIGHT
            if y > PAGE_BOTTOM:
                self.pdf.add_page()
                y = PAGE_TOP
        return y

    def _footer(self, y: float) -> None:
        # Keep the total and payment block together on one page
        needed = 60 + ROW_HEIGHT * len(self.document.payment_lines)
        if y + needed > PAGE_HEIGHT:
            self.pdf.add_page()
            y = PAGE_TOP

        y += 10
        self.pdf.line(TOTAL_COL, y, RIGHT_EDGE, y)
        y += 10
        self._text(TOTAL_COL, y, f"TOTAL: {format_money(self.document.total)}", style="B")

        y += 30
        self._text(LEFT, y, "PAYMENT INFORMATION:", style="B")
        for line in self.document.payment_lines:
            y += 10
            self._text(LEFT, y, line)

    def render(self) -> bytes:
        self.pdf.add_page()
        self._header()
        y = self._rows(130)
        self._footer(y)
        return bytes(self.pdf.output())


def render_invoice_pdf(document: InvoiceDocument) -> bytes:
    """Render an invoice to PDF bytes."""
    return InvoicePDF(document).render()
