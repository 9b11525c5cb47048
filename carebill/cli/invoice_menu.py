from __future__ import annotations

from pathlib import Path

import questionary
from rich.console import Console
from rich.table import Table

from carebill.mailer import EmailConfigurationError, EmailDeliveryError
from carebill.models import format_currency, format_number
from carebill.models.client import Client
from carebill.models.invoice import BatchSummary, InvoiceData
from carebill.services.invoice_service import InvoiceService
from carebill.settings import settings

console = Console()

BACK = "Back"


def list_clients_menu(service: InvoiceService) -> None:
    clients = service.list_clients()

    if not clients:
        console.print("[yellow]No clients registered.[/yellow]")
        return

    table = Table(title="Clients")
    table.add_column("ID", style="dim")
    table.add_column("Facility", style="bold")
    table.add_column("Email")
    table.add_column("Rate", justify="right")
    table.add_column("Schedule")
    table.add_column("Active", justify="center")

    for c in clients:
        table.add_row(
            c.id,
            c.facility_name,
            c.email,
            format_currency(c.hourly_rate),
            c.billing_schedule.summary().removeprefix("Billing: "),
            "yes" if c.active else "no",
        )

    console.print()
    console.print(table)
    console.print()


def _select_client(service: InvoiceService, message: str) -> Client | None:
    clients = service.list_clients()
    if not clients:
        console.print("[yellow]No clients registered.[/yellow]")
        return None

    client_choices = {f"{c.id} - {c.facility_name}": c for c in clients}
    choice = questionary.select(message, choices=list(client_choices.keys()) + [BACK]).ask()
    if choice is None or choice == BACK:
        return None
    return client_choices[choice]


def show_invoice(invoice: InvoiceData) -> None:
    table = Table(title=f"Invoice {invoice.invoice_number}")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Hours", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Amount", justify="right")

    for item in invoice.line_items:
        table.add_row(
            item.date,
            item.description,
            f"{item.hours:.2f}",
            format_currency(item.rate),
            format_currency(item.amount),
        )

    console.print()
    console.print(f"[bold]{invoice.facility_name}[/bold]  {invoice.billing_period}")
    console.print(table)
    console.print(f"  Total hours: {format_number(invoice.total_hours)}")
    console.print(f"  Subtotal:    {format_currency(invoice.subtotal)}")
    console.print(f"  Tax ({format_number(invoice.tax_rate)}%): {format_currency(invoice.tax)}")
    console.print(f"  [bold]Total:       {format_currency(invoice.total)}[/bold]")
    console.print(f"  [dim]{invoice.notes}[/dim]")
    console.print()


def preview_invoice_menu(service: InvoiceService) -> None:
    client = _select_client(service, "Preview invoice for:")
    if client is None:
        return
    show_invoice(service.preview(client))


def save_invoice_pdf_menu(service: InvoiceService) -> None:
    client = _select_client(service, "Save invoice PDF for:")
    if client is None:
        return

    invoice = service.issue(client)
    pdf_bytes, filename = service.render(invoice)

    out_dir = Path(settings.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / filename
    path.write_bytes(pdf_bytes)
    console.print(f"[green]Saved {path.resolve()}[/green]")

    if service.transport is None:
        return
    send_now = questionary.confirm(f"Email {invoice.invoice_number} to {client.email} now?", default=False).ask()
    if not send_now:
        return
    try:
        service.send_invoice(client, invoice=invoice)
    except (EmailConfigurationError, EmailDeliveryError) as exc:
        console.print(f"[red]Failed to send {invoice.invoice_number}: {exc}[/red]")
        return
    console.print(f"[green]Sent {invoice.invoice_number} to {client.email}[/green]")


def _print_summary(summary: BatchSummary) -> None:
    table = Table(title="Invoice Generation Summary")
    table.add_column("Client", style="bold")
    table.add_column("Invoice")
    table.add_column("Total", justify="right")
    table.add_column("Status")

    for r in summary.results:
        status = "[green]sent[/green]" if r.success else f"[red]failed: {r.error}[/red]"
        total = format_currency(r.total) if r.total is not None else "-"
        table.add_row(r.client_name or r.client_id, r.invoice_number or "-", total, status)

    console.print()
    console.print(table)
    console.print(f"Total: {summary.total}  Successful: {summary.successful}  Failed: {summary.failed}")
    console.print()


def send_invoices_menu(service: InvoiceService, single: bool = False) -> None:
    client_id = None
    if single:
        client = _select_client(service, "Send invoice to:")
        if client is None:
            return
        client_id = client.id
    else:
        count = len(service.client_repo.list_active())
        confirmed = questionary.confirm(f"Send invoices to {count} active clients?", default=False).ask()
        if not confirmed:
            console.print("[yellow]Cancelled.[/yellow]")
            return

    try:
        summary = service.run(client_id)
    except (EmailConfigurationError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        return
    _print_summary(summary)
