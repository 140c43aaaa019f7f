"""Transactional email delivery through SendGrid.

The transport configuration is built once at startup (:class:`MailConfig`)
and handed to :class:`EmailSender`; nothing here reads settings on its own.
Delivery failures are logged and reported as ``False``; they are never
retried or raised to the caller.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from html import escape
from typing import Any
from urllib.parse import urlencode

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, Mail

from juscrm.config import Settings

logger = logging.getLogger(__name__)

_BRAND = "JusCRM"


@dataclass(frozen=True)
class MailConfig:
    """Explicit transport configuration for :class:`EmailSender`."""

    api_key: str | None
    sender: str | None
    sender_name: str
    frontend_url: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailConfig":
        return cls(
            api_key=settings.sendgrid_api_key,
            sender=settings.sendgrid_sender,
            sender_name=settings.sendgrid_sender_name,
            frontend_url=settings.frontend_url.rstrip("/"),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key and self.sender)

    def link(self, path: str, **params: str) -> str:
        """Build an absolute frontend link for ``path`` with query ``params``."""

        query = f"?{urlencode(params)}" if params else ""
        return f"{self.frontend_url}/{path.lstrip('/')}{query}"


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, "", b""):
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
            messages = []
            for item in errors:
                if not isinstance(item, dict) or not item.get("message"):
                    continue
                help_link = item.get("help")
                message = str(item["message"])
                messages.append(f"{message} (help: {help_link})" if help_link else message)
            if messages:
                return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_delivery_failure(status_code: Any, body: Any, *, exc: Exception | None = None) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid request failed: %s", details)
    else:
        logger.error("Error sending email via SendGrid: %s", exc)


def _layout(*, header: str, color: str, body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f'<div style="background-color: {color}; color: white; padding: 20px; text-align: center;">'
        f"<h1>{header}</h1></div>"
        f'<div style="padding: 20px; background-color: #f9fafb;">{body}</div>'
        '<div style="background-color: #374151; color: #9ca3af; padding: 20px; '
        'text-align: center; font-size: 14px;">'
        f"<p>&copy; {_BRAND}. Todos os direitos reservados.</p></div>"
        "</div>"
    )


def _button(url: str, label: str, color: str) -> str:
    return (
        '<div style="text-align: center; margin: 30px 0;">'
        f'<a href="{escape(url, quote=True)}" style="background-color: {color}; color: white; '
        "padding: 12px 24px; text-decoration: none; border-radius: 6px; "
        f'display: inline-block;">{label}</a></div>'
        "<p>Ou copie e cole este link no seu navegador:</p>"
        f'<p style="word-break: break-all; color: #6b7280; font-size: 14px;">{escape(url)}</p>'
    )


class EmailSender:
    """Render the account templates and deliver them via SendGrid."""

    def __init__(self, config: MailConfig) -> None:
        self.config = config

    def send(self, subject: str, html_content: str, recipient: str) -> bool:
        """Send one message. Returns ``True`` only on a 2xx response."""

        if not self.config.enabled:
            logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
            return False

        message = Mail(
            from_email=Email(self.config.sender, self.config.sender_name),
            to_emails=recipient,
            subject=subject,
            html_content=html_content,
        )

        try:
            response = SendGridAPIClient(self.config.api_key).send(message)
        except Exception as exc:
            _log_delivery_failure(
                getattr(exc, "status_code", None), getattr(exc, "body", None), exc=exc
            )
            return False

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            _log_delivery_failure(status_code, getattr(response, "body", None))
            return False

        logger.info("Email '%s' sent to %s", subject, recipient)
        return True

    def send_password_reset_email(self, email: str, name: str, token: str) -> bool:
        """Send the password recovery link carrying the single-use ``token``."""

        reset_url = self.config.link("reset-password", token=token)
        body = (
            f"<h2>Olá, {escape(name)}!</h2>"
            f"<p>Você solicitou a recuperação da sua senha no {_BRAND}.</p>"
            "<p>Clique no botão abaixo para redefinir sua senha:</p>"
            + _button(reset_url, "Redefinir Senha", "#3b82f6")
            + '<div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;">'
            '<p style="color: #6b7280; font-size: 14px;"><strong>Importante:</strong> '
            "Este link expira em 1 hora por segurança.</p>"
            '<p style="color: #6b7280; font-size: 14px;">'
            "Se você não solicitou esta recuperação, ignore este email.</p></div>"
        )
        html_content = _layout(header=_BRAND, color="#3b82f6", body=body)
        return self.send(f"Recuperação de Senha - {_BRAND}", html_content, email)

    def send_email_verification(self, email: str, name: str, token: str) -> bool:
        """Send the address confirmation link carrying the single-use ``token``."""

        verification_url = self.config.link("verify-email", token=token)
        body = (
            f"<h2>Olá, {escape(name)}!</h2>"
            f"<p>Obrigado por se cadastrar no {_BRAND}.</p>"
            "<p>Para completar seu cadastro, precisamos verificar seu email.</p>"
            + _button(verification_url, "Verificar Email", "#059669")
        )
        html_content = _layout(
            header=f"Bem-vindo ao {_BRAND}!", color="#059669", body=body
        )
        return self.send(f"Verificação de Email - {_BRAND}", html_content, email)

    def send_new_user_credentials_email(self, email: str, name: str, password: str) -> bool:
        """Send the temporary credentials of an account created by an administrator."""

        body = (
            f"<h2>Olá, {escape(name)}!</h2>"
            "<p>Sua conta foi criada com sucesso.</p>"
            f"<p><strong>Email:</strong> {escape(email)}<br>"
            f"<strong>Senha temporária:</strong> {escape(password)}</p>"
            "<p>Por segurança, entre no sistema e altere sua senha o quanto antes.</p>"
            + _button(self.config.link("login"), "Acessar", "#3b82f6")
        )
        html_content = _layout(header=_BRAND, color="#3b82f6", body=body)
        return self.send(f"Bem-vindo ao {_BRAND}", html_content, email)


__all__ = ["EmailSender", "MailConfig"]
