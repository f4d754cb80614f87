"""Handler for the / endpoint."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["root"])

index_page = """
<html>
    <head>
        <title>AI page summarizer service</title>
    </head>
    <body style='font-family: sans-serif;text-align:center;'>
        <h1>AI page summarizer service</h1>
        <div><a href="docs">Swagger UI</a></div>
        <div><a href="redoc">ReDoc</a></div>
        <div><a href="metrics">Metrics</a></div>
    </body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def root_endpoint_handler(request: Request) -> HTMLResponse:
    """Return index page with links to API documentation."""
    # Nothing interesting in the request
    _ = request
    logger.info("Response to / endpoint")
    return HTMLResponse(index_page)
