"""Health check endpoint."""

from fastapi import Request


async def health(request: Request) -> dict:
    """GET /health - reports the configured upstream."""
    backend = request.app.state.backend
    return {"status": "ok", "upstream": backend.name}
