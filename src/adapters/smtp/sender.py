"""
SMTP email sender adapter - Implements ConfirmationSender protocol.

Renders the HTML confirmation template with Jinja2 and delivers it through
smtplib. A new SMTP connection is opened per message, so one instance can
be shared by concurrent requests.
"""

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "email-confirmation.html"
SUBJECT = "Email Confirmation"


def _template_environment(directory: Path) -> Environment:
    return Environment(loader=FileSystemLoader(str(directory)), autoescape=True)


def render_confirmation(
    environment: Environment,
    recipient_name: str,
    verification_link: str,
    confirmation_code: str,
) -> str:
    """Render the confirmation template; values are HTML-escaped."""
    template = environment.get_template(TEMPLATE_NAME)
    return template.render(
        userName=recipient_name,
        confirmationLink=verification_link,
        confirmationCode=confirmation_code,
    )


class SmtpConfirmationSender:
    """
    Implements ConfirmationSender protocol via SMTP.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        sender: str = "",
        use_tls: bool = True,
        template_dir: Path = TEMPLATE_DIR,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender or username
        self._use_tls = use_tls
        self._templates = _template_environment(template_dir)

        if not self._password:
            logger.warning("SMTP password not configured, email sending will likely fail")

    def send_confirmation(
        self,
        recipient_name: str,
        verification_link: str,
        confirmation_code: str,
        recipient_email: str,
    ) -> None:
        """
        Render and send the confirmation email.

        Raises:
            jinja2.TemplateNotFound: Template missing from template_dir
            OSError: SMTP connection failure
            smtplib.SMTPException: Server rejected login or message
        """
        body = render_confirmation(
            self._templates, recipient_name, verification_link, confirmation_code
        )

        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = recipient_email
        message["Subject"] = SUBJECT
        message.set_content(
            f"Confirm your email: {verification_link}\nConfirmation code: {confirmation_code}"
        )
        message.add_alternative(body, subtype="html")

        with smtplib.SMTP(self._host, self._port) as server:
            if self._use_tls:
                server.starttls()
            if self._username:
                server.login(self._username, self._password)
            server.send_message(message)

        logger.info("Confirmation email sent to %s", recipient_email)
