"""Transactional email for order status updates.

Messages go through SendGrid when it is configured and through SMTP
otherwise. Every helper raises :class:`EmailDeliveryError` on failure; callers
that treat email as optional must catch it themselves.
"""

from __future__ import annotations

import html
import json
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from notification_service.config import Settings, get_settings
from notification_service.domain.entities import DeliveryStatus

logger = logging.getLogger(__name__)

SMTP_SSL_PORT = 465

_STATUS_BADGE_COLORS = {
    DeliveryStatus.ACCEPTED.value: "#4caf50",
    DeliveryStatus.PICKED_UP.value: "#2196f3",
}
_DEFAULT_BADGE_COLOR = "#8bc34a"


class EmailDeliveryError(RuntimeError):
    """The message could not be handed to the configured transport."""


class EmailConfigurationError(EmailDeliveryError):
    """No email transport is configured."""


@dataclass(frozen=True)
class OrderStatusEmail:
    subject: str
    headline: str
    detail: str
    text: str
    html: str


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    return str(parsed)


def _send_with_sendgrid(
    settings: Settings, to: str, subject: str, text: str, html_content: str
) -> None:
    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=to,
        subject=subject,
        plain_text_content=text,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:
        status_code = getattr(exc, "status_code", None)
        details = _extract_sendgrid_error_details(getattr(exc, "body", None))
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
        raise EmailDeliveryError("SendGrid rejected the message") from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        details = _extract_sendgrid_error_details(getattr(response, "body", None))
        logger.error("SendGrid API responded with status %s: %s", status_code, details)
        raise EmailDeliveryError(f"SendGrid responded with status {status_code}")


def _send_with_smtp(
    settings: Settings, to: str, subject: str, text: str, html_content: str
) -> None:
    message = EmailMessage()
    message["From"] = formataddr((settings.email_from_name, settings.email_from or ""))
    message["To"] = to
    message["Subject"] = subject
    message.set_content(text)
    message.add_alternative(html_content, subtype="html")

    host = settings.email_host or ""
    port = settings.email_port
    timeout = settings.email_timeout_seconds
    context = ssl.create_default_context()
    try:
        # Port 465 speaks implicit TLS; any other port upgrades with STARTTLS.
        if port == SMTP_SSL_PORT:
            with smtplib.SMTP_SSL(host, port, context=context, timeout=timeout) as server:
                _login_and_send(server, settings, message)
        else:
            with smtplib.SMTP(host, port, timeout=timeout) as server:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
                _login_and_send(server, settings, message)
    except (smtplib.SMTPException, OSError) as exc:
        raise EmailDeliveryError(f"SMTP delivery to {host}:{port} failed") from exc


def _login_and_send(server: smtplib.SMTP, settings: Settings, message: EmailMessage) -> None:
    if settings.email_user:
        server.login(settings.email_user, settings.email_pass or "")
    server.send_message(message)


def send_email(to: str, subject: str, text: str, html_content: str) -> None:
    """Send an email through the configured transport or raise."""

    settings = get_settings()
    if settings.sendgrid_configured:
        _send_with_sendgrid(settings, to, subject, text, html_content)
    elif settings.smtp_configured:
        _send_with_smtp(settings, to, subject, text, html_content)
    else:
        raise EmailConfigurationError("No email transport is configured")
    logger.info("Email '%s' sent to %s", subject, to)


def build_order_status_email(
    order_id: str, status: str, delivery_person_name: str | None = None
) -> OrderStatusEmail:
    """Render subject and bodies for a delivery status update."""

    short_id = order_id[:8]
    courier = delivery_person_name or "Your delivery person"
    if status == DeliveryStatus.ACCEPTED.value:
        subject = f"Your Order #{short_id} has been accepted"
        headline = "Your order has been accepted!"
        detail = f"{courier} has accepted your order and will be picking it up soon."
    elif status == DeliveryStatus.PICKED_UP.value:
        subject = f"Your Order #{short_id} is on the way"
        headline = "Your order is on the way!"
        detail = f"{courier} has picked up your order and is on the way to deliver it."
    elif status == DeliveryStatus.DELIVERED.value:
        subject = f"Your Order #{short_id} has been delivered"
        headline = "Your order has been delivered!"
        detail = f"{courier} has delivered your order. Enjoy your meal!"
    else:
        subject = f"Update on your Order #{short_id}"
        headline = f"Your order status has been updated to {status}"
        detail = "Check the app for more details."

    text = "\n".join(
        (
            headline,
            "",
            detail,
            "",
            f"Order ID: {order_id}",
            f"Current Status: {status}",
            "",
            "Thank you for using our Food Ordering System!",
        )
    )

    badge_color = _STATUS_BADGE_COLORS.get(status, _DEFAULT_BADGE_COLOR)
    follow_up = (
        "<p>We'll notify you again when your order is picked up.</p>"
        if status == DeliveryStatus.ACCEPTED.value
        else ""
    )
    html_content = "".join(
        (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;'
            ' padding: 20px; border: 1px solid #eee; border-radius: 10px;">',
            f'<h1 style="color: #e53935; text-align: center;">{html.escape(headline)}</h1>',
            '<div style="background-color: #f9f9f9; padding: 15px; border-radius: 5px;">',
            f'<p style="font-size: 16px; color: #333;">{html.escape(detail)}</p>',
            "</div>",
            "<h3>Order Details:</h3>",
            f"<p><strong>Order ID:</strong> {html.escape(order_id)}</p>",
            "<p><strong>Current Status:</strong> ",
            f'<span style="padding: 2px 8px; border-radius: 3px; background-color: {badge_color};'
            f' color: white;">{html.escape(status)}</span></p>',
            follow_up,
            '<p style="color: #666; font-size: 14px; text-align: center;">'
            "Thank you for using our Food Ordering System!</p>",
            "</div>",
        )
    )
    return OrderStatusEmail(
        subject=subject, headline=headline, detail=detail, text=text, html=html_content
    )


def send_order_status_email(
    email: str,
    order_id: str,
    status: str,
    delivery_person_name: str | None = None,
) -> None:
    """Email ``email`` about the delivery status of ``order_id``."""

    rendered = build_order_status_email(order_id, status, delivery_person_name)
    send_email(email, rendered.subject, rendered.text, rendered.html)


__all__ = [
    "EmailConfigurationError",
    "EmailDeliveryError",
    "OrderStatusEmail",
    "build_order_status_email",
    "send_email",
    "send_order_status_email",
]
