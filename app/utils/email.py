import asyncio
import smtplib
import ssl
from abc import ABC, abstractmethod
from asyncio import TimeoutError as AsyncioTimeoutError
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from app.core.exceptions import NotificationError
from app.core.logger import logger_manager


TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"


class EmailBackend(ABC):
    """Transport that delivers a fully built message."""

    @abstractmethod
    async def send_email(self, message: MIMEMultipart) -> None:
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        pass


class EmailTemplateLoader:
    """Jinja2 loader for the HTML email templates, with a render cache."""

    def __init__(self, template_dir: Union[str, Path] = TEMPLATE_DIR):
        self.template_dir = Path(template_dir)
        self.logger = logger_manager.get_logger(__name__)
        self._template_cache: Dict[str, Any] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_template(self, template_name: str, **kwargs) -> str:
        try:
            template = self._template_cache.get(template_name)
            if template is None:
                template = self.env.get_template(f"{template_name}.html")
                self._template_cache[template_name] = template
            return template.render(**kwargs)

        except TemplateNotFound:
            self.logger.error(
                f"Template '{template_name}' not found in '{self.template_dir}'"
            )
            raise FileNotFoundError(
                f"Template '{template_name}' not found in '{self.template_dir}'"
            )

    def template_exists(self, template_name: str) -> bool:
        return (self.template_dir / f"{template_name}.html").exists()


class SMTPEmailBackend(EmailBackend):
    """SMTP transport (Brevo relay by default). Blocking calls run in a thread."""

    def __init__(self, email_settings):
        self.email_settings = email_settings
        self.logger = logger_manager.get_logger(__name__)

    def _create_ssl_context(self) -> ssl.SSLContext:
        ssl_context = ssl.create_default_context()

        cert_reqs = self.email_settings.EMAIL_SSL_CERT_REQS
        if cert_reqs == "required":
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        elif cert_reqs == "optional":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_OPTIONAL
        else:
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE

        return ssl_context

    def _create_smtp_server(self, ssl_context: ssl.SSLContext) -> smtplib.SMTP:
        if self.email_settings.EMAIL_USE_SSL:
            server = smtplib.SMTP_SSL(
                self.email_settings.EMAIL_HOST,
                self.email_settings.EMAIL_PORT,
                timeout=self.email_settings.EMAIL_TIMEOUT,
                context=ssl_context,
            )
        else:
            server = smtplib.SMTP(
                self.email_settings.EMAIL_HOST,
                self.email_settings.EMAIL_PORT,
                timeout=self.email_settings.EMAIL_TIMEOUT,
            )
            if self.email_settings.EMAIL_USE_TLS:
                server.starttls(context=ssl_context)

        return server

    def _send_sync(self, message: MIMEMultipart) -> None:
        server = self._create_smtp_server(self._create_ssl_context())
        try:
            server.login(
                self.email_settings.EMAIL_HOST_USER,
                self.email_settings.EMAIL_HOST_PASSWORD.get_secret_value(),
            )
            server.sendmail(
                self.email_settings.sender_address, message["To"], message.as_string()
            )
        finally:
            try:
                server.quit()
            except smtplib.SMTPException as e:
                self.logger.warning(f"Error closing SMTP connection: {e}")

    async def send_email(self, message: MIMEMultipart) -> None:
        await asyncio.to_thread(self._send_sync, message)
        self.logger.info(f"SMTP accepted message for {message['To']}")

    def test_connection(self) -> bool:
        try:
            server = self._create_smtp_server(self._create_ssl_context())
            server.login(
                self.email_settings.EMAIL_HOST_USER,
                self.email_settings.EMAIL_HOST_PASSWORD.get_secret_value(),
            )
            server.quit()
            return True
        except (smtplib.SMTPException, OSError) as e:
            self.logger.error(f"SMTP connection test failed: {e}")
            return False


class EmailMessage:
    """Email message builder class."""

    def __init__(self, subject: str, recipient: str, sender: str):
        self.subject = subject
        self.recipient = recipient
        self.sender = sender
        self.html_content: Optional[str] = None

    def set_html_content(self, content: str) -> "EmailMessage":
        self.html_content = content
        return self

    def build(self) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = self.recipient
        msg["Subject"] = self.subject

        if self.html_content:
            msg.attach(MIMEText(self.html_content, "html", "utf-8"))

        return msg


class EmailService:
    """Renders a template and delivers it with bounded, linearly backed-off retries."""

    def __init__(
        self,
        backend: EmailBackend,
        config_settings,
        template_loader: Optional[EmailTemplateLoader] = None,
    ):
        self.backend = backend
        self.settings = config_settings
        self.template_loader = template_loader or EmailTemplateLoader()
        self.logger = logger_manager.get_logger(__name__)

    @property
    def is_configured(self) -> bool:
        return self.settings.email.is_configured

    def _prepare_template_variables(self, recipient: str, **extra_vars) -> Dict[str, str]:
        now = datetime.now(timezone.utc)
        base_vars = {
            "recipient": recipient,
            "year": str(now.year),
            "current_date": now.strftime("%A, %B %d, %Y %H:%M UTC"),
            "app_name": self.settings.app.APP_NAME,
            "frontend_url": self.settings.email.FRONTEND_URL.rstrip("/"),
        }
        base_vars.update(extra_vars)
        return base_vars

    def _create_email_message(
        self,
        subject: str,
        recipient: str,
        template_name: str,
        template_vars: Dict[str, str],
    ) -> EmailMessage:
        try:
            html_content = self.template_loader.render_template(
                template_name, **template_vars
            )
        except FileNotFoundError as e:
            raise NotificationError(str(e)) from e

        sender = formataddr(
            (self.settings.email.EMAIL_SENDER_NAME, self.settings.email.sender_address)
        )
        return EmailMessage(subject, recipient, sender).set_html_content(html_content)

    async def send_email(
        self,
        subject: str,
        recipient: str,
        template: str,
        retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        timeout: Optional[int] = None,
        **template_vars,
    ) -> None:
        """
        Send ``template`` rendered for ``recipient``.

        Each attempt is bounded by ``timeout``; attempt ``n`` that fails is
        followed by a ``retry_delay * n`` second pause. Raises
        NotificationError once every attempt has failed.
        """
        email_settings = self.settings.email
        retries = email_settings.EMAIL_MAX_RETRIES if retries is None else retries
        retry_delay = email_settings.EMAIL_RETRY_DELAY if retry_delay is None else retry_delay
        timeout = timeout or email_settings.EMAIL_TIMEOUT

        if not recipient or "@" not in recipient:
            raise NotificationError(f"Invalid recipient address: {recipient!r}")

        if not subject.strip():
            raise NotificationError("Email subject cannot be empty")

        template_variables = self._prepare_template_variables(recipient, **template_vars)
        mime_message = self._create_email_message(
            subject, recipient, template, template_variables
        ).build()

        for attempt in range(1, retries + 1):
            try:
                self.logger.debug(f"📤 Email attempt {attempt}/{retries} to {recipient}")
                await asyncio.wait_for(
                    self.backend.send_email(mime_message), timeout=timeout
                )
                self.logger.info(
                    f"✅ Email sent to {recipient} using template '{template}'"
                )
                return

            except AsyncioTimeoutError:
                self.logger.warning(
                    f"Timeout while sending email to {recipient}, attempt {attempt}/{retries}"
                )
            except (smtplib.SMTPException, OSError) as e:
                self.logger.warning(
                    f"Error sending email to {recipient}, attempt {attempt}/{retries}: {e}"
                )

            if attempt < retries:
                await asyncio.sleep(retry_delay * attempt)

        self.logger.error(f"❌ Failed to send email to {recipient} after {retries} attempts")
        raise NotificationError(f"Email to {recipient} failed after {retries} attempts")

    def test_connection(self) -> bool:
        return self.backend.test_connection()


_email_service_instance = None


def get_email_service() -> EmailService:
    """Get the process-wide email service instance."""
    global _email_service_instance
    if _email_service_instance is None:
        from app.core.config.settings import settings

        _email_service_instance = EmailService(
            backend=SMTPEmailBackend(settings.email),
            config_settings=settings,
        )
    return _email_service_instance


class EmailServiceProxy:
    """Lazily resolves the email service on first attribute access."""

    def __getattr__(self, name):
        return getattr(get_email_service(), name)


email_service = EmailServiceProxy()
