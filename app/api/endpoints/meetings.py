from fastapi import APIRouter, Request

from app.core.dependencies import ProxyDependency
from app.services.upstream import build_meetings_url

router = APIRouter(prefix="/meetings", tags=["meetings"])

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("", methods=PROXY_METHODS)
@router.api_route("/{sub_path:path}", methods=PROXY_METHODS)
async def proxy_meetings(request: Request, proxy: ProxyDependency):
    sub_path = request.path_params.get("sub_path", "")
    url = build_meetings_url(sub_path, request.query_params.multi_items())
    proxied = await proxy.fetch(url, json_only=True)
    return proxied.to_response()
