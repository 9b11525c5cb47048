from datetime import date

from carebill.billing import generate_invoice_data
from carebill.invoice_numbers import SequentialInvoiceNumberGenerator
from carebill.models.schedule import CustomSchedule, DailySchedule
from carebill.pdf.invoice import InvoicePDF, get_pdf_filename


def _make_invoice(schedule=None, **overrides):
    kwargs = dict(
        today=date(2025, 3, 15),
        number_generator=SequentialInvoiceNumberGenerator(),
    )
    kwargs.update(overrides)
    return generate_invoice_data(
        "Sunshine Healthcare Facility",
        "123 Medical Drive",
        "Springfield, IL 62701",
        "(555) 123-4567",
        "billing@sunshinehealthcare.com",
        65.0,
        schedule or DailySchedule(),
        **kwargs,
    )


class TestInvoicePDF:
    def test_generate_returns_pdf_bytes(self):
        result = InvoicePDF().generate(_make_invoice())
        assert isinstance(result, bytes)
        assert result[:5] == b"%PDF-"

    def test_company_name_override(self):
        pdf_gen = InvoicePDF(company_name="Acme Staffing")
        assert pdf_gen.company_name == "Acme Staffing"
        result = pdf_gen.generate(_make_invoice())
        assert len(result) > 1000

    def test_generate_with_tax(self):
        result = InvoicePDF().generate(_make_invoice(tax_rate=8.5))
        assert result[:5] == b"%PDF-"

    def test_generate_without_line_items(self):
        result = InvoicePDF().generate(_make_invoice(CustomSchedule()))
        assert result[:5] == b"%PDF-"

    def test_generate_without_notes(self):
        invoice = _make_invoice().model_copy(update={"notes": ""})
        result = InvoicePDF().generate(invoice)
        assert result[:5] == b"%PDF-"


class TestGetPdfFilename:
    def test_sanitizes_facility_name(self):
        invoice = _make_invoice()
        assert get_pdf_filename(invoice) == "INV-202503-0001_Sunshine_Healthcare_Facility.pdf"

    def test_punctuation_replaced(self):
        invoice = _make_invoice().model_copy(update={"facility_name": "St. Mary's / East"})
        assert get_pdf_filename(invoice) == "INV-202503-0001_St__Mary_s___East.pdf"
