from typing import Any

from fastapi import status


class ProxyError(Exception):
    """Base class for failures on the proxy path.

    Every subclass is recovered at the request boundary and rendered as the
    standard error envelope with ``status_code``.
    """

    message = "Proxy error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "", url: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail
        self.url = url

    def to_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {"details": self.detail}
        if self.url:
            data["url"] = self.url
        return data


class UpstreamError(ProxyError):
    """Upstream answered with a non-success status; the status is forwarded."""

    message = "External API error"

    def __init__(self, status_code: int, reason: str = "", url: str | None = None):
        super().__init__(reason, url=url)
        self.status_code = status_code

    def to_data(self) -> dict[str, Any]:
        data = super().to_data()
        data["status"] = self.status_code
        return data


class TransportError(ProxyError):
    message = "Proxy error"


class MalformedResponseError(ProxyError):
    message = "Malformed upstream response"


class CacheCorruptionError(ProxyError):
    message = "Invalid cached data"
