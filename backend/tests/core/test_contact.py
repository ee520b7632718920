"""Contact Messages — verifies validation and email rendering.

Invariants:
    - Missing or blank fields raise ContactValidationError listing each one
    - Email address format is not checked
    - HTML body escapes visitor input and renders newlines as <br>
"""

import pytest

from folio.core.contact import (
    ContactMessage, compose_contact_email, validate_contact,
)
from folio.core.errors import ContactValidationError


def test_valid_submission_returns_message():
    msg = validate_contact("Ada", "ada@example.com", "Hello")
    assert msg == ContactMessage("Ada", "ada@example.com", "Hello")


def test_empty_name_is_rejected():
    with pytest.raises(ContactValidationError) as exc_info:
        validate_contact("", "a@b.com", "hi")
    assert exc_info.value.missing == ["name"]
    assert exc_info.value.http_status == 400


def test_all_missing_fields_are_reported():
    with pytest.raises(ContactValidationError) as exc_info:
        validate_contact(None, "  ", None)
    assert exc_info.value.missing == ["name", "email", "message"]


def test_email_format_is_not_validated():
    msg = validate_contact("A", "not-an-email", "hi")
    assert msg.email == "not-an-email"


def test_compose_builds_subject_and_bodies():
    msg = ContactMessage("Ada", "ada@example.com", "line one\nline two")
    out = compose_contact_email(msg, "noreply@example.com", "me@example.com")

    assert out.subject == "Website contact from Ada"
    assert out.sender == '"Website Contact" <noreply@example.com>'
    assert out.recipient == "me@example.com"
    assert out.reply_to == "ada@example.com"
    assert out.text == "Name: Ada\nEmail: ada@example.com\n\nline one\nline two"
    assert "<p>line one<br>line two</p>" in out.html


def test_compose_escapes_html():
    msg = ContactMessage("<b>Eve</b>", "e@x.com", "<script>alert(1)</script>")
    out = compose_contact_email(msg, "s@x.com", "r@x.com")
    assert "<script>" not in out.html
    assert "&lt;script&gt;" in out.html
    assert "&lt;b&gt;Eve&lt;/b&gt;" in out.html


def test_subject_never_carries_newlines():
    msg = ContactMessage("Eve\r\nBcc: victim@x.com", "e@x.com", "hi")
    out = compose_contact_email(msg, "s@x.com", "r@x.com")
    assert "\n" not in out.subject
    assert "\r" not in out.subject
