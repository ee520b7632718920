"""Upload Route — gated single-file upload returning a blob reference.

Invariants:
    - Multipart field name is "file"; exactly one file per request
    - Response is {"url": "/uploads/<marker>-<name>"}, usable as a project image
    - An upload over the size limit is rejected before its bytes are read into memory
"""

from fastapi import APIRouter, Depends, File, UploadFile

from folio.api.dependencies import get_context, require_admin
from folio.context import AppContext
from folio.core.errors import PayloadTooLargeError

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_file(
    file: UploadFile = File(...),
    context: AppContext = Depends(get_context),
):
    """Store the uploaded bytes and return their public reference."""
    limit = context.blobs.max_bytes
    if limit is None:
        data = await file.read()
    else:
        if file.size is not None and file.size > limit:
            raise PayloadTooLargeError(file.size, limit)
        # One byte past the limit is enough for the store to reject it
        data = await file.read(limit + 1)
    reference = await context.blobs.store(file.filename, data)
    return {"url": reference}
