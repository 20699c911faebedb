"""Logging context middleware for request correlation."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.studio.core.logging import bind_brand_context, bind_request_context, clear_request_context
from src.studio.models.enums import Brand

INVOICE_PATH_PREFIX = "/api/v1/invoices/"


def _brand_from_path(path: str) -> Brand | None:
    if not path.startswith(INVOICE_PATH_PREFIX):
        return None
    segment = path[len(INVOICE_PATH_PREFIX) :].split("/", 1)[0]
    try:
        return Brand(segment)
    except ValueError:
        return None


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id, plus the brand on invoice routes, to log context."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    brand = _brand_from_path(request.url.path)
    if brand is not None:
        bind_brand_context(brand.value)
    try:
        response = await call_next(request)
        return response
    finally:
        clear_request_context()
