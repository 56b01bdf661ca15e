"""File server hit metrics."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from chirpy.middleware.hit_counter import HitCounter

router = APIRouter(tags=["metrics"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_METRICS_TEMPLATE = """<html>
<body>
<h1>Welcome, Chirpy Admin</h1>
<p>Chirpy has been visited {hits} times!</p>
</body>
</html>
"""


def _counter(request: Request) -> HitCounter:
    return request.app.state.hit_counter


@router.get("/metrics", response_class=PlainTextResponse)
def api_metrics(request: Request) -> str:
    return f"Hits: {_counter(request).value}"


@router.api_route("/reset", methods=["GET", "POST"], response_class=PlainTextResponse)
def reset_metrics(request: Request) -> str:
    """Reset the file server hit counter."""
    _counter(request).reset()
    return "Hits reset to 0"


@admin_router.get("/metrics", response_class=HTMLResponse)
def admin_metrics(request: Request) -> str:
    return ADMIN_METRICS_TEMPLATE.format(hits=_counter(request).value)
