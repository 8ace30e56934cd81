"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkprompt.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.inkprompt_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="InkPrompt",
        description="Tattoo prompt engine: staged enhancement, style transfer and backend recommendation",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all stage modules to trigger registration
    _register_stages()

    from inkprompt.api.router import api_router

    app.include_router(api_router)

    return app


def _register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    from inkprompt.engine.registry import load_builtin_stages

    registry = load_builtin_stages()
    logging.getLogger(__name__).info("Registered %d enhancement stages", registry.count)


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "inkprompt.main:app",
        host=settings.inkprompt_host,
        port=settings.inkprompt_port,
        log_level=settings.inkprompt_log_level.lower(),
        reload=settings.inkprompt_env == "development",
    )


if __name__ == "__main__":
    run()
