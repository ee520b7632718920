"""Contact Route — public endpoint forwarding a visitor message by email.

Invariants:
    - Accepts JSON or form bodies with name, email, message
    - 400 on missing fields, 502 when delivery fails, {"ok": true} otherwise
"""

from fastapi import APIRouter, Depends, Request

from folio.api.dependencies import get_context, read_payload
from folio.context import AppContext

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact")
async def submit_contact(
    request: Request, context: AppContext = Depends(get_context),
):
    payload = await read_payload(request)
    await context.contact.relay(
        payload.get("name"), payload.get("email"), payload.get("message"),
    )
    return {"ok": True}
