"""FastAPI dependencies for shared per-application resources."""

from fastapi import Request

from contribution_api.core.cache import TTLCache
from contribution_api.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_markup_cache(request: Request) -> TTLCache[str]:
    return request.app.state.markup_cache
