import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from twilight.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

PLAIN_TEXT_FALLBACK = "Open this email in an HTML-capable client to follow the Twilight link."
SMTPS_PORT = 465


def build_message(settings: Settings, to_email: str, subject: str, html_body: str) -> EmailMessage:
    """Twilight mail: sent on behalf of the application name, HTML with a text fallback."""
    msg = EmailMessage()
    msg["From"] = formataddr((settings.application_email_name, settings.smtp_from))
    msg["To"] = to_email
    msg["Subject"] = subject
    msg["Message-ID"] = make_msgid(domain=settings.smtp_from.rpartition("@")[2] or None)
    msg.set_content(PLAIN_TEXT_FALLBACK)
    msg.add_alternative(html_body, subtype="html")
    return msg


def _connect(settings: Settings) -> smtplib.SMTP:
    if settings.smtp_port == SMTPS_PORT:
        return smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port)
    server = smtplib.SMTP(settings.smtp_host, settings.smtp_port)
    try:
        server.starttls()
    except (smtplib.SMTPException, OSError):
        server.close()
        raise
    return server


def send_email(to_email: str, subject: str, html_body: str):
    settings = get_settings()
    missing = [
        name for name in ("smtp_host", "smtp_user", "smtp_pass", "smtp_from") if not getattr(settings, name)
    ]
    if missing:
        raise RuntimeError(f"SMTP settings are not configured: {', '.join(missing)}")

    msg = build_message(settings, to_email, subject, html_body)
    with _connect(settings) as server:
        server.login(settings.smtp_user, settings.smtp_pass)
        server.send_message(msg)
    logger.debug("Mail %s handed to %s:%s", msg["Message-ID"], settings.smtp_host, settings.smtp_port)
