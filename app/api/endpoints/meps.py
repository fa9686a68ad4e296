from fastapi import APIRouter

from app.core.dependencies import ProxyDependency
from app.services.upstream import build_mep_url

router = APIRouter(prefix="/meps", tags=["meps"])


@router.get("/{mep_id}")
async def proxy_mep(mep_id: str, proxy: ProxyDependency):
    proxied = await proxy.fetch(build_mep_url(mep_id), json_only=False)
    return proxied.to_response()
