"""Email delivery of the generated invoice over SMTP.

Delivery only happens when a recipient and the full credential set
(address, user, password) are configured. Otherwise it is skipped.
"""

import logging
import re
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader

from .models import InvoiceOptions, SmtpSettings

logger = logging.getLogger(__name__)

# Template directory
TEMPLATE_DIR = Path(__file__).parent / "templates"

# authentication option -> (SMTP mechanism, smtplib auth object)
AUTH_MECHANISMS = {
    "plain": ("PLAIN", "auth_plain"),
    "login": ("LOGIN", "auth_login"),
    "cram_md5": ("CRAM-MD5", "auth_cram_md5"),
}

_jinja = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=False,
    keep_trailing_newline=True,
)


def should_send(options: InvoiceOptions) -> bool:
    return bool(options.send_to) and options.smtp.is_complete


def first_line(text: Optional[str]) -> str:
    """First line of a multi-line field, split on ``<br />`` or newlines."""
    return re.split(r"<br\s*/?>|\n", text or "", maxsplit=1)[0].strip()


def build_message(
    options: InvoiceOptions,
    number: str,
    pdf_path: Union[str, Path],
) -> EmailMessage:
    """Email with the invoice PDF attached."""
    pdf_path = Path(pdf_path)
    sender = first_line(options.sender)

    msg = EmailMessage()
    msg["Subject"] = f"Invoice {number} from {sender}"
    msg["From"] = options.send_from or options.smtp.user
    msg["To"] = options.send_to

    body = _jinja.get_template("email_body.txt").render(
        number=number,
        po=options.po,
        sender=sender,
        client=first_line(options.client),
    )
    msg.set_content(body)
    msg.add_attachment(
        pdf_path.read_bytes(),
        maintype="application",
        subtype="pdf",
        filename=pdf_path.name,
    )
    return msg


def _authenticate(server: smtplib.SMTP, smtp: SmtpSettings) -> None:
    mechanism, auth_object = AUTH_MECHANISMS[smtp.authentication]
    # smtplib's auth objects read the credentials from the connection
    server.user, server.password = smtp.user, smtp.password
    server.auth(mechanism, getattr(server, auth_object))


def send_invoice(
    options: InvoiceOptions,
    number: str,
    pdf_path: Union[str, Path],
) -> bool:
    """
    Send the invoice PDF to ``options.send_to``.

    Returns:
        True if sent, False if delivery was skipped
    """
    if not should_send(options):
        logger.info("Email not sent: recipient or SMTP credentials missing")
        return False

    msg = build_message(options, number, pdf_path)
    smtp = options.smtp

    with smtplib.SMTP(smtp.address, smtp.port) as server:
        server.ehlo()
        if smtp.enable_starttls_auto and server.has_extn("starttls"):
            server.starttls()
            server.ehlo()
        _authenticate(server, smtp)
        server.send_message(msg)

    logger.info(f"Invoice {number} sent to {options.send_to}")
    return True
