from __future__ import annotations

import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage

from pydantic import BaseModel

from carebill.models import format_currency
from carebill.models.invoice import InvoiceData
from carebill.settings import settings

logger = logging.getLogger(__name__)


class EmailConfigurationError(RuntimeError):
    """Transport settings are missing or incomplete."""


class EmailDeliveryError(RuntimeError):
    """The mail server rejected or failed to accept the message."""


class EmailConfig(BaseModel):
    to: str
    subject: str
    body: str
    attachment_name: str
    attachment_content: bytes
    attachment_type: str = "application/pdf"


def build_invoice_email(
    invoice: InvoiceData,
    pdf_bytes: bytes,
    filename: str,
    company_name: str | None = None,
) -> EmailConfig:
    company = company_name or settings.company_name
    body = (
        f"Dear {invoice.facility_name} Team,\n\n"
        f"Please find attached invoice {invoice.invoice_number} "
        f"for the billing period {invoice.billing_period}.\n\n"
        f"Total Amount Due: {format_currency(invoice.total)}\n"
        "Due Date: Net 30 Days\n\n"
        "Thank you for your continued partnership.\n\n"
        f"Best regards,\n{company}"
    )
    return EmailConfig(
        to=invoice.email,
        subject=f"Invoice {invoice.invoice_number} - {company}",
        body=body,
        attachment_name=filename,
        attachment_content=pdf_bytes,
    )


class MailTransport(ABC):
    @abstractmethod
    def send(self, config: EmailConfig) -> None:
        """Deliver a message; raise on failure."""
        ...


class SMTPTransport(MailTransport):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        from_email: str = "",
        from_name: str = "",
        timeout: int = 30,
    ) -> None:
        if not host:
            raise EmailConfigurationError("SMTP host is not configured")
        if not from_email:
            raise EmailConfigurationError("Sender address is not configured")
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout

    def _build_message(self, config: EmailConfig) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = config.subject
        msg["From"] = f"{self.from_name} <{self.from_email}>" if self.from_name else self.from_email
        msg["To"] = config.to
        msg.set_content(config.body)

        maintype, _, subtype = config.attachment_type.partition("/")
        msg.add_attachment(
            config.attachment_content,
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=config.attachment_name,
        )
        return msg

    def send(self, config: EmailConfig) -> None:
        msg = self._build_message(config)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP send to %s failed: %s", config.to, exc)
            raise EmailDeliveryError(f"Failed to send email to {config.to}: {exc}") from exc
        logger.info("Email sent to %s (subject=%r)", config.to, config.subject)


def get_transport() -> MailTransport:
    return SMTPTransport(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        from_email=settings.email_from,
        from_name=settings.email_from_name,
        timeout=settings.smtp_timeout,
    )
