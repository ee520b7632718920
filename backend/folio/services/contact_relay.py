"""Contact Relay — validates a visitor submission and hands it to the mail transport.

Invariants:
    - Validation happens before any IO; an invalid submission never reaches the transport
    - Exactly one send per successful relay; DeliveryError propagates unretried
    - Nothing about the submission is stored
"""

import logging

from folio.core.contact import compose_contact_email, validate_contact
from folio.core.repository_protocols import MailTransport

logger = logging.getLogger(__name__)


class ContactRelay:
    """Forwards contact-form messages to the configured recipient."""

    def __init__(self, transport: MailTransport, sender: str, recipient: str):
        self.transport = transport
        self.sender = sender
        self.recipient = recipient

    async def relay(
        self, name: str | None, email: str | None, message: str | None,
    ) -> None:
        contact = validate_contact(name, email, message)
        outgoing = compose_contact_email(contact, self.sender, self.recipient)
        await self.transport.send(outgoing)
