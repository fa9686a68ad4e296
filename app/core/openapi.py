from fastapi.openapi.utils import get_openapi
from app.core.config import settings


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=settings.APP_NAME,
        version=settings.PROJECT_VERSION,
        description=(
            "Caching proxy in front of the European Parliament open-data API "
            f"({settings.UPSTREAM_BASE_URL}). Responses are kept for "
            f"{settings.CACHE_DURATION_SECONDS} seconds."
        ),
        routes=app.routes,
    )
    openapi_schema["servers"] = [{"url": f"http://localhost:{settings.PORT}"}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema
