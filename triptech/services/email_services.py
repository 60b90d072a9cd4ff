import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from functools import lru_cache

from ..core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, settings: Settings):
        self.smtp_server = settings.MAIL_SERVER
        self.smtp_port = settings.MAIL_PORT
        self.username = settings.MAIL_USERNAME
        self.password = settings.MAIL_PASSWORD
        self.from_email = settings.MAIL_FROM

    def _send_email(self, to_email: str, subject: str, html_content: str) -> None:
        if not self.smtp_server:
            logger.warning("MAIL_SERVER is not configured, skipping email %r to %s", subject, to_email)
            return

        message = MIMEMultipart()
        message["From"] = self.from_email
        message["To"] = to_email
        message["Subject"] = subject

        html_part = MIMEText(html_content, "html")
        message.attach(html_part)

        try:
            with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
                server.starttls()
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(message)
        except Exception:
            logger.exception("Error sending email to %s", to_email)
            raise

    def _get_credentials_template(self, full_name: str, username: str, password: str) -> str:
        return f"""
        <html>
            <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
                <h2>Welcome to TripTech, {full_name}!</h2>
                <p>Your account has been created. Use these credentials to sign in:</p>
                <p>Username: <strong>{username}</strong></p>
                <p>Password: <code style="font-size: 18px; color: #4A90E2;">{password}</code></p>
                <p>Please change your password after your first login.</p>
            </body>
        </html>
        """

    def send_credentials_email(self, to_email: str, full_name: str, username: str, password: str) -> None:
        self._send_email(
            to_email=to_email,
            subject="Your TripTech account",
            html_content=self._get_credentials_template(full_name, username, password),
        )


@lru_cache
def get_email_service() -> EmailService:
    return EmailService(get_settings())
