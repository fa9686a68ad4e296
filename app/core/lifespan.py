from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.client.identities import IdentityResolver
from app.client.meetings import create_meetings_client
from app.services.upstream import create_upstream_client
from app.utils.caching import cache
from app.utils.logging import get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    upstream_client = create_upstream_client()
    meetings_client = create_meetings_client(app)
    app.state.upstream_client = upstream_client
    app.state.meetings_client = meetings_client
    app.state.identity_resolver = IdentityResolver(meetings_client.person)
    logger = get_logger()
    logger.info(
        f"Startup: {app.title} v{app.version} starting, "
        f"caching upstream responses for {cache.retention_seconds:.0f}s..."
    )
    yield
    # Shutdown
    await meetings_client.close()
    await upstream_client.close()
    logger.info(f"Shutdown: App shutting down, dropping {len(cache)} cached responses...")
