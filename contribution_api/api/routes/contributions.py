from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi.responses import JSONResponse

from contribution_api.api.dependencies import get_markup_cache
from contribution_api.api.dependencies import get_settings
from contribution_api.api.schemas.contributions import CalendarResponse
from contribution_api.api.schemas.contributions import ContributionResponse
from contribution_api.api.schemas.contributions import ErrorResponse
from contribution_api.core.cache import TTLCache
from contribution_api.core.observability import report_exception
from contribution_api.services.calendar_service import build_calendar_payload
from contribution_api.services.contribution_service import ContributionFetchError
from contribution_api.services.contribution_service import ContributionServiceError
from contribution_api.services.contribution_service import get_contribution_data
from contribution_api.settings import Settings


router = APIRouter()

ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def error_response(exc: ContributionServiceError) -> JSONResponse:
    if isinstance(exc, ContributionFetchError):
        report_exception(exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@router.get("/")
async def root() -> dict[str, str]:
    """Describe the service and point at its contribution endpoint."""

    return {
        "service": "github-contributions",
        "contributions_url": "/api/github-contributions",
    }


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get(
    "/api/github-contributions",
    response_model=ContributionResponse,
    responses=ERROR_RESPONSES,
)
def get_github_contributions(
    username: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
    cache: TTLCache[str] = Depends(get_markup_cache),
):
    """Return the parsed contribution calendar for a GitHub user."""

    try:
        return get_contribution_data(username, settings=settings, cache=cache)
    except ContributionServiceError as exc:
        return error_response(exc)


@router.get(
    "/api/github-contributions/calendar",
    response_model=CalendarResponse,
    responses=ERROR_RESPONSES,
)
def get_github_contribution_calendar(
    username: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
    cache: TTLCache[str] = Depends(get_markup_cache),
):
    """Return the contribution calendar as Sunday-aligned weeks with month markers."""

    try:
        result = get_contribution_data(username, settings=settings, cache=cache)
    except ContributionServiceError as exc:
        return error_response(exc)
    return build_calendar_payload(result)
