"""Contact Relay & Route — verifies validation, single delivery and failure mapping.

Invariants:
    - Missing fields → 400 VALIDATION_ERROR, nothing sent
    - Valid submission → exactly one email to the configured recipient
    - Transport failure → 502 DELIVERY_ERROR, not retried
"""

import pytest

from folio.core.errors import ContactValidationError, DeliveryError
from folio.services.contact_relay import ContactRelay
from tests.services.fakes import FakeMailer


async def test_relay_rejects_empty_name():
    mailer = FakeMailer()
    relay = ContactRelay(mailer, "noreply@example.com", "owner@example.com")
    with pytest.raises(ContactValidationError):
        await relay.relay("", "a@b.com", "hi")
    assert mailer.sent == []


async def test_relay_sends_exactly_once():
    mailer = FakeMailer()
    relay = ContactRelay(mailer, "noreply@example.com", "owner@example.com")
    await relay.relay("A", "a@b.com", "hi")
    assert len(mailer.sent) == 1
    assert mailer.sent[0].recipient == "owner@example.com"
    assert mailer.sent[0].subject == "Website contact from A"


async def test_relay_propagates_delivery_error():
    mailer = FakeMailer()
    mailer.fail = True
    relay = ContactRelay(mailer, "noreply@example.com", "owner@example.com")
    with pytest.raises(DeliveryError):
        await relay.relay("A", "a@b.com", "hi")


async def test_contact_route_json(client, fake_mailer):
    res = await client.post(
        "/api/contact",
        json={"name": "A", "email": "a@b.com", "message": "hi"},
    )
    assert res.status_code == 200
    assert res.json() == {"ok": True}
    assert len(fake_mailer.sent) == 1


async def test_contact_route_form(client, fake_mailer):
    res = await client.post(
        "/api/contact",
        data={"name": "A", "email": "a@b.com", "message": "hi"},
    )
    assert res.status_code == 200
    assert len(fake_mailer.sent) == 1


async def test_contact_route_needs_no_admin(client, fake_mailer):
    res = await client.post(
        "/api/contact",
        json={"name": "A", "email": "a@b.com", "message": "hi"},
        headers={"X-Admin-Pass": "wrong"},
    )
    assert res.status_code == 200


async def test_contact_route_missing_fields(client, fake_mailer):
    res = await client.post("/api/contact", json={"name": "A"})
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert "email" in body["message"]
    assert fake_mailer.sent == []


async def test_contact_route_delivery_failure(client, fake_mailer):
    fake_mailer.fail = True
    res = await client.post(
        "/api/contact",
        json={"name": "A", "email": "a@b.com", "message": "hi"},
    )
    assert res.status_code == 502
    assert res.json()["error"]["code"] == "DELIVERY_ERROR"
