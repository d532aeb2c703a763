"""Named route lookup for links built by presenters."""

from typing import Any, Callable, Optional

from starlette.requests import Request
from starlette.routing import NoMatchFound

from .config import get_settings

UrlBuilder = Callable[..., str]

# Paths of the public routes, used when no request is available
# (background jobs, tests, JSON built outside a request).
ROUTE_PATHS = {
    "home": "/",
    "incident": "/incidents/{incident_id}",
}


def make_url_builder(
    request: Optional[Request] = None, base_url: Optional[str] = None
) -> UrlBuilder:
    if request is not None:

        def url_for(name: str, **params: Any) -> str:
            return str(request.url_for(name, **params))

        return url_for

    if base_url is None:
        base_url = get_settings().app_url
    root = base_url.rstrip("/")

    def url_for(name: str, **params: Any) -> str:
        try:
            path = ROUTE_PATHS[name].format(**{k: str(v) for k, v in params.items()})
        except (KeyError, IndexError):
            raise NoMatchFound(name, params)
        return root + path

    return url_for
