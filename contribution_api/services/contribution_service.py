import re
from datetime import UTC
from datetime import datetime

import httpx
from loguru import logger

from contribution_api.clients.github_client import build_contributions_url
from contribution_api.clients.github_client import fetch_contributions_markup
from contribution_api.core.cache import TTLCache
from contribution_api.services.contribution_parser import parse_contributions
from contribution_api.settings import Settings


USERNAME_PATTERN = re.compile(r"[A-Za-z0-9-]{1,39}")


class ContributionServiceError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = 500
    message = "Could not load contribution data right now."


class UpstreamUnavailableError(ContributionServiceError):
    """Raised when GitHub answers with a non-success status."""

    status_code = 502
    message = "Unable to fetch GitHub contribution data."


class ContributionsNotFoundError(ContributionServiceError):
    """Raised when the markup loads but contains no contribution days."""

    status_code = 404
    message = "No contribution data found for this user."


class ContributionFetchError(ContributionServiceError):
    """Raised for transport failures and any other unexpected error."""


def sanitize_username(raw_username: str | None, default_username: str) -> str:
    """Return `raw_username` if it is a valid GitHub handle, else the default."""

    if isinstance(raw_username, str) and USERNAME_PATTERN.fullmatch(raw_username):
        return raw_username
    return default_username


def get_contribution_data(
    raw_username: str | None,
    settings: Settings,
    cache: TTLCache[str],
) -> dict[str, object]:
    """Fetch, parse and package one user's contribution calendar.

    Raises:
        UpstreamUnavailableError: GitHub returned a non-success status.
        ContributionsNotFoundError: No day cells could be parsed.
        ContributionFetchError: Network or any other unexpected failure.
    """

    username = sanitize_username(raw_username, settings.default_username)
    if raw_username and username != raw_username:
        logger.info(f"Username {raw_username!r} rejected, using {username!r}")

    url = build_contributions_url(settings.github_contributions_url, username)

    def load_markup() -> str:
        logger.info(f"Fetching contribution calendar from {url}")
        return fetch_contributions_markup(
            url=url,
            user_agent=settings.github_user_agent,
            timeout=settings.request_timeout_seconds,
        )

    try:
        markup = cache.get_or_fetch(url, settings.cache_ttl_seconds, load_markup)
    except httpx.HTTPStatusError as exc:
        logger.warning(
            f"GitHub returned {exc.response.status_code} for {username!r}"
        )
        raise UpstreamUnavailableError from exc
    except Exception as exc:
        logger.error(f"Contribution fetch failed for {username!r}: {exc!r}")
        raise ContributionFetchError from exc

    declared_total, days = parse_contributions(markup)
    if not days:
        logger.warning(f"No contribution days found in markup for {username!r}")
        raise ContributionsNotFoundError

    if declared_total is None:
        total = sum(int(day["count"]) for day in days)
        logger.debug(f"Declared total missing, summed {len(days)} days to {total}")
    else:
        total = declared_total

    return {
        "username": username,
        "total": total,
        "days": days,
        "updatedAt": datetime.now(UTC),
    }
