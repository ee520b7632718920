"""SMTP Mailer — verifies message construction and error mapping without a network."""

import smtplib

import pytest

from folio.core.contact import OutgoingEmail
from folio.core.errors import DeliveryError
from folio.infrastructure.mailer import SmtpMailer, build_message

EMAIL = OutgoingEmail(
    sender='"Website Contact" <noreply@example.com>',
    recipient="owner@example.com",
    subject="Website contact from Ada",
    text="Name: Ada",
    html="<p>Name: Ada</p>",
    reply_to="ada@example.com",
)


class _FakeSMTP:
    instances: list["_FakeSMTP"] = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, message):
        if _FakeSMTP.fail_with:
            raise _FakeSMTP.fail_with
        self.calls.append(("send", message))


@pytest.fixture
def fake_smtp(monkeypatch):
    _FakeSMTP.instances = []
    _FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    return _FakeSMTP


def test_build_message_has_text_and_html_parts():
    msg = build_message(EMAIL)
    assert msg["Subject"] == "Website contact from Ada"
    assert msg["Reply-To"] == "ada@example.com"
    assert msg.get_body(("plain",)).get_content().strip() == "Name: Ada"
    assert msg.get_body(("html",)).get_content().strip() == "<p>Name: Ada</p>"


async def test_send_uses_starttls_login_and_timeout(fake_smtp):
    mailer = SmtpMailer(
        "smtp.example.com", 587, "apikey", "pw", timeout_seconds=5,
    )
    await mailer.send(EMAIL)

    smtp = fake_smtp.instances[0]
    assert (smtp.host, smtp.port, smtp.timeout) == ("smtp.example.com", 587, 5)
    assert smtp.calls[0] == "starttls"
    assert smtp.calls[1] == ("login", "apikey", "pw")
    assert smtp.calls[2][0] == "send"


async def test_send_skips_login_without_password(fake_smtp):
    await SmtpMailer("smtp.example.com", username="apikey", password="").send(EMAIL)
    assert not any(isinstance(c, tuple) and c[0] == "login" for c in fake_smtp.instances[0].calls)


async def test_smtp_failure_maps_to_delivery_error(fake_smtp):
    fake_smtp.fail_with = smtplib.SMTPRecipientsRefused({})
    with pytest.raises(DeliveryError):
        await SmtpMailer("smtp.example.com").send(EMAIL)
    assert len(fake_smtp.instances) == 1


async def test_connection_failure_maps_to_delivery_error(monkeypatch):
    def _refuse(*args, **kwargs):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(smtplib, "SMTP", _refuse)
    with pytest.raises(DeliveryError) as exc_info:
        await SmtpMailer("smtp.example.com").send(EMAIL)
    assert exc_info.value.http_status == 502
