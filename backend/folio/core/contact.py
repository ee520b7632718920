"""Contact Messages — validation and rendering of visitor contact submissions.

Invariants:
    - name, email and message are all required and non-blank
    - email format is NOT validated (accepted as-is)
    - Every visitor-supplied value is HTML-escaped in the HTML rendering
    - Nothing here is persisted; the message is rendered and handed off

Design Decisions:
    - Pure functions returning frozen dataclasses: the relay service does the IO
"""

from dataclasses import dataclass
from html import escape

from folio.core.errors import ContactValidationError

SENDER_DISPLAY_NAME = "Website Contact"


@dataclass(frozen=True)
class ContactMessage:
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class OutgoingEmail:
    """Fully rendered email ready for a transport."""
    sender: str
    recipient: str
    subject: str
    text: str
    html: str
    reply_to: str | None = None


def validate_contact(
    name: str | None, email: str | None, message: str | None,
) -> ContactMessage:
    """Return a ContactMessage or raise ContactValidationError naming the gaps."""
    fields = {"name": name, "email": email, "message": message}
    missing = [
        key for key, value in fields.items()
        if not isinstance(value, str) or not value.strip()
    ]
    if missing:
        raise ContactValidationError(missing)
    return ContactMessage(name=name, email=email, message=message)


def compose_contact_email(
    msg: ContactMessage, sender: str, recipient: str,
) -> OutgoingEmail:
    """Render plain-text and HTML bodies addressed to the site owner."""
    text = f"Name: {msg.name}\nEmail: {msg.email}\n\n{msg.message}"
    body_html = escape(msg.message).replace("\r\n", "\n").replace("\n", "<br>")
    html = (
        f"<p><strong>Name:</strong> {escape(msg.name)}</p>"
        f"<p><strong>Email:</strong> {escape(msg.email)}</p>"
        f"<p>{body_html}</p>"
    )
    return OutgoingEmail(
        sender=f'"{SENDER_DISPLAY_NAME}" <{sender}>',
        recipient=recipient,
        subject=f"Website contact from {_header_safe(msg.name)}",
        text=text,
        html=html,
        reply_to=_header_safe(msg.email),
    )


def _header_safe(value: str) -> str:
    # header values may not carry CR/LF
    return " ".join(value.split())
