import logging
from dataclasses import dataclass
from email.utils import make_msgid
from typing import Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import Template, Context
from django.utils.html import strip_tags

from .models import EmailTemplate, EmailLog

logger = logging.getLogger(__name__)

# Backends that accept a message without handing it to a mail server.
MOCK_BACKENDS = {
    "django.core.mail.backends.console.EmailBackend",
    "django.core.mail.backends.locmem.EmailBackend",
    "django.core.mail.backends.dummy.EmailBackend",
    "django.core.mail.backends.filebased.EmailBackend",
}

MOCK_EMAIL_NOTE = "Mock email (no mail transport configured)"


@dataclass
class SendResult:
    success: bool
    message_id: Optional[str] = None
    mock_email: bool = False
    error: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "messageId": self.message_id,
            "mockEmail": self.mock_email,
            "error": self.error,
        }


def is_mock_backend() -> bool:
    return getattr(settings, "EMAIL_BACKEND", "") in MOCK_BACKENDS


def render_template(template: EmailTemplate, context: dict) -> str:
    tpl = Template(template.html_body)
    return tpl.render(Context(context))


def render_subject(template: EmailTemplate, context: dict) -> str:
    return Template(template.subject).render(Context(context)).strip()


def get_active_template(name: str, locale: str = "en") -> Optional[EmailTemplate]:
    return (
        EmailTemplate.objects.filter(name=name, locale=locale, is_active=True)
        .order_by("-version")
        .first()
    )


def send_order_email(order, recipient: str, kind: str, context: Optional[dict] = None,
                     locale: str = "en") -> SendResult:
    """
    Render the `kind` template for `order` and hand it to the mail backend.
    Never raises for transport problems; the result says what happened.
    """
    template = get_active_template(kind, locale)
    if not template:
        logger.error("Email template %s (%s) not found", kind, locale)
        return SendResult(False, error=f"Email template '{kind}' not found")

    ctx = {"order": order}
    ctx.update(context or {})
    subject = render_subject(template, ctx)
    html_body = render_template(template, ctx)
    message_id = make_msgid(domain="jewellery.local")

    try:
        msg = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html_body),
            from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
            to=[recipient],
            headers={"Message-ID": message_id},
        )
        msg.attach_alternative(html_body, "text/html")
        msg.send(fail_silently=False)
    except Exception as exc:
        logger.exception("Failed to send %s email to %s", kind, recipient)
        return SendResult(False, error=str(exc))

    mock = is_mock_backend()
    logger.info("Sent %s email to %s (%s)", kind, recipient, "mock" if mock else message_id)
    return SendResult(True, message_id=message_id, mock_email=mock)


def record_email_log(order_id: int, email_type: str, recipient: str, result: SendResult) -> EmailLog:
    status = EmailLog.STATUS_MOCK_SENT if result.mock_email else EmailLog.STATUS_SENT
    return EmailLog.objects.create(
        order_id=order_id,
        email_type=email_type,
        recipient_email=recipient,
        status=status,
        message_id=result.message_id,
        error_message=MOCK_EMAIL_NOTE if result.mock_email else None,
    )
