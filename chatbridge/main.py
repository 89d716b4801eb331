"""FastAPI application for the chat-to-responses bridge."""

import logging
from typing import Any, Mapping, Optional

from fastapi import FastAPI

from .api.routes import chat_completions, health
from .config_loader import load_config, resolve_server_settings
from .core.backend import backend_from_config
from .logging import setup_logging

logger = logging.getLogger("chatbridge")


def create_app(config: Optional[Mapping[str, Any]] = None) -> FastAPI:
    """Factory function to create the FastAPI application.

    Args:
        config: Parsed configuration. Loaded with :func:`load_config` when
            omitted.

    Returns:
        The configured FastAPI application instance.

    Raises:
        ConfigurationError: If the upstream block is missing or invalid.
    """
    if config is None:
        config = load_config()

    backend = backend_from_config(config)

    app = FastAPI(title="chatbridge")
    app.state.backend = backend
    app.state.config = config

    app.post("/v1/chat/completions")(chat_completions)
    app.get("/health")(health)

    logger.info(f"Bridge created for upstream {backend.name}: {backend.base_url}")
    return app


def run() -> None:
    """Load configuration and serve the bridge with uvicorn."""
    import uvicorn

    config = load_config()
    logging_cfg = config.get("logging") or {}
    setup_logging(str(logging_cfg.get("level", "INFO")).upper())

    host, port = resolve_server_settings(config)
    app = create_app(config)
    logger.info(f"chatbridge listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
