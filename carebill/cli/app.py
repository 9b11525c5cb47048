import logging
from pathlib import Path

import questionary
from rich.console import Console

from carebill.cli.invoice_menu import (
    list_clients_menu,
    preview_invoice_menu,
    save_invoice_pdf_menu,
    send_invoices_menu,
)
from carebill.invoice_numbers import FileInvoiceNumberGenerator
from carebill.mailer import EmailConfigurationError, get_transport
from carebill.repositories.factory import get_client_repository
from carebill.services.invoice_service import InvoiceService
from carebill.settings import settings

logger = logging.getLogger(__name__)

console = Console()


def _counter_path() -> Path:
    if settings.invoice_counter_file:
        return Path(settings.invoice_counter_file)
    return Path(settings.output_dir) / "invoice_counters.json"


def _build_service() -> InvoiceService:
    client_repo = get_client_repository()
    try:
        transport = get_transport()
    except EmailConfigurationError as exc:
        logger.warning("Email delivery disabled: %s", exc)
        transport = None
    return InvoiceService(
        client_repo,
        transport=transport,
        number_generator=FileInvoiceNumberGenerator(_counter_path()),
    )


def main_menu() -> None:
    service = _build_service()

    console.print()
    console.print("[bold]Invoice Generator[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Clients",
                "Preview Invoice",
                "Save Invoice PDF",
                "Send Invoices to All Active Clients",
                "Send Invoice to One Client",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "List Clients":
            list_clients_menu(service)
        elif choice == "Preview Invoice":
            preview_invoice_menu(service)
        elif choice == "Save Invoice PDF":
            save_invoice_pdf_menu(service)
        elif choice == "Send Invoices to All Active Clients":
            send_invoices_menu(service)
        elif choice == "Send Invoice to One Client":
            send_invoices_menu(service, single=True)
