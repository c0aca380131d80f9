# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
naive-ui icon fix transform service.

A small FastAPI server the host build plugin forwards its hooks to. The
session (build mode, version gate, filters) is configured once at startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import HOST, LOG_LEVEL, PORT

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure the patch session before serving any hook."""
    from .patching import get_session

    # Misconfigured filters raise here and abort startup.
    session = get_session()
    if session.skip:
        logger.info("Icon fix disabled for this session, all hooks will pass through")
    logger.info(f"Transform service listening on http://{HOST}:{PORT}")

    yield

    logger.info("Server shutting down...")


# Initialize FastAPI app
app = FastAPI(
    title="naive-ui Icon Fix",
    description="Build-time source patches for the naive-ui icon vnode leak.",
    version=VERSION,
    lifespan=lifespan,
    openapi_url="/openapi.json",
)

# Include routers
from .routers.plugin import router as plugin_router
app.include_router(plugin_router, prefix="/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint with session information."""
    try:
        from .patching import get_session

        session = get_session()
        return {
            "status": "healthy",
            "mode": session.mode.value,
            "active": session.active,
            "dependency": {
                "version": session.gate.version,
                "fixed_version": session.gate.threshold,
                "skip": session.gate.skip,
            },
            "version": VERSION,
        }
    except Exception as e:
        logger.error(f"Health check error: {e}")
        return {
            "status": "error",
            "error": str(e),
            "version": VERSION,
        }


def main():
    """Run the server using uvicorn."""
    import uvicorn

    uvicorn.run(
        "iconfix.main:app",
        host=HOST,
        port=PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
