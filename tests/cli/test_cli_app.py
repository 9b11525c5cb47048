from datetime import date
from unittest.mock import MagicMock, patch

from carebill.mailer import EmailConfigurationError


class TestBuildService:
    @patch("carebill.cli.app.get_transport")
    @patch("carebill.cli.app.get_client_repository")
    def test_returns_service(self, mock_repo, mock_transport, tmp_path, monkeypatch):
        from carebill.cli import app

        monkeypatch.setattr(app.settings, "output_dir", str(tmp_path))
        monkeypatch.setattr(app.settings, "invoice_counter_file", "")
        from carebill.cli.app import _build_service
        from carebill.invoice_numbers import FileInvoiceNumberGenerator
        from carebill.services.invoice_service import InvoiceService

        service = _build_service()
        assert isinstance(service, InvoiceService)
        assert service.transport is mock_transport.return_value
        assert isinstance(service.number_generator, FileInvoiceNumberGenerator)
        assert service.number_generator.path == tmp_path / "invoice_counters.json"

    @patch("carebill.cli.app.get_transport")
    @patch("carebill.cli.app.get_client_repository")
    def test_missing_email_config_disables_transport(self, mock_repo, mock_transport):
        from carebill.cli.app import _build_service

        mock_transport.side_effect = EmailConfigurationError("SMTP host is not configured")
        service = _build_service()
        assert service.transport is None

    @patch("carebill.cli.app.get_transport")
    @patch("carebill.cli.app.get_client_repository")
    def test_sessions_continue_invoice_sequence(self, mock_repo, mock_transport, client_repo, tmp_path, monkeypatch):
        from carebill.cli import app

        monkeypatch.setattr(app.settings, "invoice_counter_file", str(tmp_path / "counters.json"))
        mock_repo.return_value = client_repo

        first = app._build_service()
        first.clock = lambda: date(2025, 3, 15)
        first_numbers = [r.invoice_number for r in first.run().results]

        second = app._build_service()
        second.clock = lambda: date(2025, 3, 15)
        second_numbers = [r.invoice_number for r in second.run().results]

        assert first_numbers == ["INV-202503-0001", "INV-202503-0002", "INV-202503-0003"]
        assert second_numbers == ["INV-202503-0004", "INV-202503-0005", "INV-202503-0006"]
        assert set(first_numbers).isdisjoint(second_numbers)


class TestMainMenu:
    @patch("carebill.cli.app._build_service")
    @patch("carebill.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from carebill.cli.app import main_menu

        mock_q.select.return_value.ask.return_value = "Exit"
        main_menu()
        mock_q.select.return_value.ask.assert_called_once()

    @patch("carebill.cli.app._build_service")
    @patch("carebill.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from carebill.cli.app import main_menu

        mock_q.select.return_value.ask.return_value = None
        main_menu()

    @patch("carebill.cli.app.send_invoices_menu")
    @patch("carebill.cli.app.save_invoice_pdf_menu")
    @patch("carebill.cli.app.preview_invoice_menu")
    @patch("carebill.cli.app.list_clients_menu")
    @patch("carebill.cli.app._build_service")
    @patch("carebill.cli.app.questionary")
    def test_dispatches_each_choice(self, mock_q, mock_build, mock_list, mock_preview, mock_save, mock_send):
        from carebill.cli.app import main_menu

        service = MagicMock()
        mock_build.return_value = service
        mock_q.select.return_value.ask.side_effect = [
            "List Clients",
            "Preview Invoice",
            "Save Invoice PDF",
            "Send Invoices to All Active Clients",
            "Send Invoice to One Client",
            "Exit",
        ]

        main_menu()

        mock_list.assert_called_once_with(service)
        mock_preview.assert_called_once_with(service)
        mock_save.assert_called_once_with(service)
        assert mock_send.call_count == 2
        mock_send.assert_called_with(service, single=True)
