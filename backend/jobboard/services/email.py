import html
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from jobboard.config import get_settings

logger = logging.getLogger(__name__)


def send_password_reset_email(to_email: str, name: str, reset_url: str, expires_minutes: int) -> bool:
    """Send a password reset link to an account holder.

    Returns True if email was sent successfully, False otherwise.
    """
    safe_name = html.escape(name or "")
    safe_url = html.escape(reset_url)

    subject = "Reset your Job Board password"
    html_body = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .button {{
                display: inline-block;
                padding: 12px 24px;
                background-color: #2b6cb0;
                color: white;
                text-decoration: none;
                border-radius: 4px;
                margin: 20px 0;
            }}
            .footer {{ color: #666; font-size: 12px; margin-top: 30px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1>Password reset</h1>
            <p>Hi {safe_name}, we received a request to reset the password for your account.</p>
            <a href="{safe_url}" class="button">Choose a new password</a>
            <p>Or copy and paste this link into your browser:</p>
            <p style="word-break: break-all;">{safe_url}</p>
            <p>This link will expire in {expires_minutes} minutes and can only be used once.</p>
            <div class="footer">
                <p>If you didn't ask to reset your password, you can safely ignore this email.</p>
            </div>
        </div>
    </body>
    </html>
    """

    text_body = f"""
    Password reset

    Hi {name}, we received a request to reset the password for your account.
    Open the link below to choose a new password:

    {reset_url}

    This link will expire in {expires_minutes} minutes and can only be used once.

    If you didn't ask to reset your password, you can safely ignore this email.
    """

    return _send_email(to_email, subject, html_body, text_body)


def _send_email(to_email: str, subject: str, html_body: str, text_body: str) -> bool:
    """Send an email via SMTP. Returns True on success."""
    settings = get_settings()
    if not settings.smtp_user or not settings.smtp_password:
        logger.warning("SMTP credentials not configured, skipping email send")
        return False

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.from_email or settings.smtp_user
    msg["To"] = to_email

    msg.attach(MIMEText(text_body, "plain"))
    msg.attach(MIMEText(html_body, "html"))

    try:
        with smtplib.SMTP(
            settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds
        ) as server:
            server.starttls()
            server.login(settings.smtp_user, settings.smtp_password)
            server.send_message(msg)
        logger.info(f"Email sent to {to_email}: {subject[:50]}")
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False
