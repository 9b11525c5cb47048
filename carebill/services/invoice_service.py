from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import date

from carebill.billing import generate_invoice_data
from carebill.constants import local_today
from carebill.invoice_numbers import (
    DraftInvoiceNumberGenerator,
    InvoiceNumberGenerator,
    RandomInvoiceNumberGenerator,
)
from carebill.logging import invoice_run
from carebill.mailer import EmailConfigurationError, MailTransport, build_invoice_email
from carebill.models.client import Client
from carebill.models.invoice import BatchSummary, InvoiceData, InvoiceGenerationResult
from carebill.pdf.invoice import InvoicePDF, get_pdf_filename
from carebill.repositories.base import ClientRepository
from carebill.settings import settings

logger = logging.getLogger(__name__)


class InvoiceService:
    def __init__(
        self,
        client_repo: ClientRepository,
        transport: MailTransport | None = None,
        pdf_generator: InvoicePDF | None = None,
        number_generator: InvoiceNumberGenerator | None = None,
        preview_number_generator: InvoiceNumberGenerator | None = None,
        tax_rate: float | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.client_repo = client_repo
        self.transport = transport
        self.pdf_generator = pdf_generator or InvoicePDF()
        self.number_generator = number_generator or RandomInvoiceNumberGenerator()
        self.preview_number_generator = preview_number_generator or DraftInvoiceNumberGenerator()
        self.tax_rate = settings.tax_rate if tax_rate is None else tax_rate
        self.clock = clock or local_today

    def list_clients(self) -> list[Client]:
        return self.client_repo.list_all()

    def _build(self, client: Client, numbers: InvoiceNumberGenerator) -> InvoiceData:
        return generate_invoice_data(
            client.facility_name,
            client.address,
            client.city,
            client.phone,
            client.email,
            client.hourly_rate,
            client.billing_schedule,
            today=self.clock(),
            tax_rate=self.tax_rate,
            number_generator=numbers,
        )

    def preview(self, client: Client) -> InvoiceData:
        """Invoice with a draft number; leaves the real sequence untouched."""
        return self._build(client, self.preview_number_generator)

    def issue(self, client: Client) -> InvoiceData:
        """Invoice with the next real invoice number."""
        invoice = self._build(client, self.number_generator)
        logger.info("Issued invoice %s for %s", invoice.invoice_number, client.facility_name)
        return invoice

    def render(self, invoice: InvoiceData) -> tuple[bytes, str]:
        """Render the invoice PDF. Returns (pdf_bytes, filename)."""
        pdf_bytes = self.pdf_generator.generate(invoice)
        filename = get_pdf_filename(invoice)
        logger.info("Generated PDF: %s", filename)
        return pdf_bytes, filename

    def send_invoice(self, client: Client, invoice: InvoiceData | None = None) -> InvoiceGenerationResult:
        """Email an invoice to the client, issuing one unless ``invoice`` is given."""
        if self.transport is None:
            raise EmailConfigurationError("Email transport is not configured")

        logger.info("Processing invoice for %s...", client.facility_name)
        if invoice is None:
            invoice = self.issue(client)
        pdf_bytes, filename = self.render(invoice)
        self.transport.send(build_invoice_email(invoice, pdf_bytes, filename))
        logger.info("Invoice %s sent to %s", invoice.invoice_number, client.email)

        return InvoiceGenerationResult(
            success=True,
            client_id=client.id,
            client_name=client.facility_name,
            invoice_number=invoice.invoice_number,
            total=invoice.total,
        )

    def _select_clients(self, client_id: str | None) -> list[Client]:
        if client_id:
            client = self.client_repo.get_by_id(client_id)
            clients = [client] if client is not None else []
        else:
            clients = self.client_repo.list_active()
        if not clients:
            logger.warning("No clients found (client_id=%s)", client_id)
            raise ValueError("No clients found")
        return clients

    def run(self, client_id: str | None = None) -> BatchSummary:
        """Send invoices to one client, or to every active client.

        A failure for one client is recorded and the batch moves on. Log
        records emitted during the batch carry its ``run_id``.
        """
        if self.transport is None:
            raise EmailConfigurationError("Email transport is not configured")

        run_id = f"run-{secrets.token_hex(4)}"
        with invoice_run(run_id):
            clients = self._select_clients(client_id)
            logger.info("Invoice batch started: %d clients", len(clients))

            summary = BatchSummary(run_id=run_id)
            for client in clients:
                try:
                    summary.results.append(self.send_invoice(client))
                except Exception as exc:
                    logger.exception("Failed to process invoice for %s", client.facility_name)
                    summary.results.append(
                        InvoiceGenerationResult(
                            success=False,
                            client_id=client.id,
                            client_name=client.facility_name,
                            error=str(exc) or type(exc).__name__,
                        )
                    )

            logger.info(
                "Invoice batch finished: total=%d successful=%d failed=%d",
                summary.total,
                summary.successful,
                summary.failed,
            )
            for failure in summary.failures:
                logger.warning("Client %s: %s", failure.client_id, failure.error)
        return summary
