from __future__ import annotations

import logging
import re

from fpdf import FPDF

from carebill.models import format_currency, format_number
from carebill.models.invoice import InvoiceData
from carebill.settings import settings

logger = logging.getLogger(__name__)

FONT = "Helvetica"

COLORS: dict[str, tuple[int, int, int]] = {
    "primary": (201, 53, 77),
    "primary_light": (255, 245, 247),
    "text_color": (51, 51, 51),
    "text_contrast": (255, 255, 255),
    "muted_text": (102, 102, 102),
    "row_alt": (248, 249, 250),
    "border_color": (222, 226, 230),
}


def get_pdf_filename(invoice: InvoiceData) -> str:
    facility = re.sub(r"[^a-zA-Z0-9]", "_", invoice.facility_name)
    return f"{invoice.invoice_number}_{facility}.pdf"


class InvoicePDF:
    def __init__(self, company_name: str | None = None) -> None:
        self.company_name = company_name or settings.company_name

    def generate(self, invoice: InvoiceData) -> bytes:
        pdf = FPDF(format="Letter")
        pdf.set_margins(10, 10, 10)
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()

        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, page_w, invoice)
        self._draw_bill_to(pdf, page_w, invoice)
        self._draw_table(pdf, page_w, invoice)
        self._draw_totals(pdf, page_w, invoice)

        if invoice.notes:
            self._draw_notes(pdf, page_w, invoice.notes)

        self._draw_footer(pdf, page_w)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: invoice=%s items=%d size=%d bytes",
            invoice.invoice_number,
            len(invoice.line_items),
            len(output),
        )
        return output

    def _draw_header(self, pdf: FPDF, page_w: float, invoice: InvoiceData) -> None:
        c = COLORS
        x = pdf.l_margin
        y = pdf.get_y()

        pdf.set_fill_color(*c["primary"])
        pdf.rect(x, y, page_w, 32, "F")

        pdf.set_xy(x + 8, y + 7)
        pdf.set_text_color(*c["text_contrast"])
        pdf.set_font(FONT, "B", 18)
        pdf.cell(page_w * 0.6, 10, self.company_name)
        pdf.set_font(FONT, "B", 24)
        pdf.cell(page_w * 0.4 - 16, 10, "INVOICE", align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_x(x + 8)
        pdf.set_font(FONT, "", 9)
        pdf.cell(page_w * 0.6, 8, "Professional Healthcare Staffing Solutions")
        pdf.cell(page_w * 0.4 - 16, 8, invoice.invoice_number, align="R")

        pdf.set_y(y + 40)

    def _draw_bill_to(self, pdf: FPDF, page_w: float, invoice: InvoiceData) -> None:
        c = COLORS
        half = page_w / 2

        pdf.set_font(FONT, "B", 8)
        pdf.set_text_color(*c["muted_text"])
        pdf.cell(half, 5, "BILL TO")
        pdf.cell(half, 5, "INVOICE DETAILS", new_x="LMARGIN", new_y="NEXT")

        left = [invoice.facility_name, invoice.address, invoice.city, invoice.phone, invoice.email]
        right = [
            f"Invoice date: {invoice.invoice_date}",
            f"Billing period: {invoice.billing_period}",
            "Terms: Net 30",
        ]

        pdf.set_text_color(*c["text_color"])
        for i in range(max(len(left), len(right))):
            pdf.set_font(FONT, "B" if i == 0 else "", 10 if i == 0 else 9)
            pdf.cell(half, 5, left[i] if i < len(left) else "")
            pdf.set_font(FONT, "", 9)
            pdf.cell(half, 5, right[i] if i < len(right) else "", new_x="LMARGIN", new_y="NEXT")

        pdf.ln(8)

    def _draw_table(self, pdf: FPDF, page_w: float, invoice: InvoiceData) -> None:
        c = COLORS
        col_date = page_w * 0.24
        col_desc = page_w * 0.36
        col_hours = page_w * 0.12
        col_rate = page_w * 0.13
        col_amount = page_w * 0.15
        line_h = 7

        pdf.set_fill_color(*c["primary"])
        pdf.set_text_color(*c["text_contrast"])
        pdf.set_font(FONT, "B", 9)
        pdf.cell(col_date, line_h, "  Date", fill=True)
        pdf.cell(col_desc, line_h, "Description", fill=True)
        pdf.cell(col_hours, line_h, "Hours", fill=True, align="R")
        pdf.cell(col_rate, line_h, "Rate", fill=True, align="R")
        pdf.cell(col_amount, line_h, "Amount  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_text_color(*c["text_color"])
        pdf.set_font(FONT, "", 9)

        for i, item in enumerate(invoice.line_items):
            if i % 2 == 0:
                pdf.set_fill_color(*c["row_alt"])
            else:
                pdf.set_fill_color(*c["text_contrast"])

            pdf.cell(col_date, line_h, f"  {item.date}", fill=True)
            pdf.cell(col_desc, line_h, item.description, fill=True)
            pdf.cell(col_hours, line_h, f"{item.hours:.2f}", fill=True, align="R")
            pdf.cell(col_rate, line_h, format_currency(item.rate), fill=True, align="R")
            pdf.cell(
                col_amount,
                line_h,
                f"{format_currency(item.amount)}  ",
                fill=True,
                align="R",
                new_x="LMARGIN",
                new_y="NEXT",
            )

        pdf.set_draw_color(*c["border_color"])
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)

    def _draw_totals(self, pdf: FPDF, page_w: float, invoice: InvoiceData) -> None:
        c = COLORS
        pdf.ln(4)

        col_label = page_w * 0.72
        col_amount = page_w * 0.28

        rows = [
            ("Total hours", format_number(invoice.total_hours)),
            ("Subtotal", format_currency(invoice.subtotal)),
            (f"Tax ({format_number(invoice.tax_rate)}%)", format_currency(invoice.tax)),
        ]
        pdf.set_text_color(*c["text_color"])
        for label, value in rows:
            pdf.set_font(FONT, "", 10)
            pdf.cell(col_label, 7, f"{label}  ", align="R")
            pdf.set_font(FONT, "B", 10)
            pdf.cell(col_amount, 7, f"{value}  ", align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.ln(2)
        pdf.set_fill_color(*c["primary"])
        pdf.set_text_color(*c["text_contrast"])
        pdf.set_font(FONT, "B", 12)
        pdf.cell(col_label, 12, "TOTAL DUE  ", fill=True, align="R")
        pdf.set_font(FONT, "B", 14)
        pdf.cell(
            col_amount,
            12,
            f"{format_currency(invoice.total)}  ",
            fill=True,
            align="R",
            new_x="LMARGIN",
            new_y="NEXT",
        )

    def _draw_notes(self, pdf: FPDF, page_w: float, notes: str) -> None:
        c = COLORS
        pdf.ln(10)

        pdf.set_font(FONT, "B", 8)
        pdf.set_text_color(*c["muted_text"])
        pdf.cell(0, 6, "NOTES", new_x="LMARGIN", new_y="NEXT")

        x = pdf.l_margin
        y = pdf.get_y()
        pdf.set_fill_color(*c["primary"])
        pdf.rect(x, y, 2, 16, "F")
        pdf.set_fill_color(*c["primary_light"])
        pdf.rect(x + 2, y, page_w - 2, 16, "F")
        pdf.set_xy(x + 8, y + 3)
        pdf.set_text_color(*c["text_color"])
        pdf.set_font(FONT, "", 9)
        pdf.multi_cell(page_w - 14, 5, notes)

    def _draw_footer(self, pdf: FPDF, page_w: float) -> None:
        c = COLORS
        pdf.set_y(-25)
        pdf.set_draw_color(*c["border_color"])
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.ln(4)
        pdf.set_font(FONT, "", 7)
        pdf.set_text_color(*c["muted_text"])
        pdf.cell(0, 5, f"{self.company_name} | {settings.email_from}", align="C")
