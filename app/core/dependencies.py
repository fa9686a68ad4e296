from typing import Annotated

from fastapi import Depends, Request

from app.client.identities import IdentityResolver
from app.client.meetings import MeetingsClient
from app.services.proxy import ProxyService
from app.services.upstream import UpstreamClient
from app.utils.caching import ResponseCache, cache


def get_cache() -> ResponseCache:
    return cache


def get_upstream_client(request: Request) -> UpstreamClient:
    return request.app.state.upstream_client


def get_proxy_service(
    response_cache: Annotated[ResponseCache, Depends(get_cache)],
    upstream: Annotated[UpstreamClient, Depends(get_upstream_client)],
) -> ProxyService:
    return ProxyService(response_cache, upstream)


def get_meetings_client(request: Request) -> MeetingsClient:
    return request.app.state.meetings_client


def get_identity_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver


CacheDependency = Annotated[ResponseCache, Depends(get_cache)]
ProxyDependency = Annotated[ProxyService, Depends(get_proxy_service)]
MeetingsClientDependency = Annotated[MeetingsClient, Depends(get_meetings_client)]
IdentityResolverDependency = Annotated[IdentityResolver, Depends(get_identity_resolver)]
