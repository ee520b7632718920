"""Static Site Fallback — serves the public site and falls back to index.html.

Invariants:
    - Mounted after every API router, so /api/* routes always win
    - Unknown paths render index.html (client-side routing for post/project slugs)
"""

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles


class SPAStaticFiles(StaticFiles):
    """StaticFiles that answers unknown paths with index.html."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)
