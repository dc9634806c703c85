"""Scrape GitHub's contribution calendar markup into plain day records.

The upstream page has no schema: every lookup here degrades to "not found",
zero or an empty list instead of raising, so markup drift shows up as
missing data rather than as a failed request.
"""

import re
from datetime import date

from bs4 import BeautifulSoup
from bs4 import Tag
from bs4.builder import ParserRejectedMarkup
from loguru import logger


TOTAL_HEADING_ID = "js-contribution-activity-description"
DAY_CELL_CLASS = "ContributionCalendar-day"
TOOLTIP_TAG = "tool-tip"
MAX_LEVEL = 4

_WHITESPACE = re.compile(r"\s+")
_TOTAL_PATTERN = re.compile(r"(\d[\d,]*)\s+contributions?\s+in the last year", re.I)
_NO_CONTRIBUTIONS_PATTERN = re.compile(r"^No contributions on ", re.I)
_COUNT_PATTERN = re.compile(r"^(\d[\d,]*)\s+contributions?\s+on ", re.I)
_ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _attribute(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if isinstance(value, str) else ""


def parse_day_date(raw_date: str) -> str | None:
    """Return `raw_date` if it is a real `YYYY-MM-DD` calendar date, else None."""

    if not _ISO_DATE_PATTERN.fullmatch(raw_date):
        return None
    try:
        return date.fromisoformat(raw_date).isoformat()
    except ValueError:
        return None


def parse_level(raw_level: str) -> int:
    """Parse a `data-level` value into 0..4, defaulting to 0."""

    try:
        level = int(raw_level)
    except (TypeError, ValueError):
        return 0
    return min(max(level, 0), MAX_LEVEL)


def parse_contribution_count(tooltip_text: str) -> int:
    """Read the day count out of tooltip text such as "5 contributions on May 1."."""

    clean = _collapse_whitespace(tooltip_text)
    if _NO_CONTRIBUTIONS_PATTERN.match(clean):
        return 0

    count_match = _COUNT_PATTERN.match(clean)
    if not count_match:
        return 0
    return int(count_match.group(1).replace(",", ""))


def parse_total_contributions(soup: BeautifulSoup) -> int | None:
    """Return the declared yearly total, or None when the heading is unusable."""

    heading = soup.find("h2", id=TOTAL_HEADING_ID)
    if not isinstance(heading, Tag):
        return None

    text = _collapse_whitespace(heading.get_text(" "))
    total_match = _TOTAL_PATTERN.search(text)
    if not total_match:
        return None

    return int(total_match.group(1).replace(",", ""))


def _is_day_cell(tag: Tag) -> bool:
    if tag.name != "td":
        return False
    return DAY_CELL_CLASS in (tag.get("class") or []) or tag.has_attr("data-date")


def parse_contribution_days(soup: BeautifulSoup) -> list[dict[str, str | int]]:
    """Extract day records sorted ascending by date.

    Counts come from tooltips that reference a cell by element id; a cell
    without a tooltip keeps count 0, a tooltip without a cell is ignored.
    """

    days: list[dict[str, str | int]] = []
    day_index_by_date: dict[str, int] = {}
    day_index_by_id: dict[str, int] = {}

    for cell in soup.find_all(_is_day_cell):
        day_date = parse_day_date(_attribute(cell, "data-date"))
        if day_date is None:
            continue

        index = day_index_by_date.get(day_date)
        if index is None:
            index = len(days)
            day_index_by_date[day_date] = index
            days.append(
                {
                    "date": day_date,
                    "count": 0,
                    "level": parse_level(_attribute(cell, "data-level")),
                }
            )

        cell_id = _attribute(cell, "id")
        if cell_id:
            day_index_by_id.setdefault(cell_id, index)

    for tooltip in soup.find_all(TOOLTIP_TAG):
        day_index = day_index_by_id.get(_attribute(tooltip, "for"))
        if day_index is None:
            continue
        days[day_index]["count"] = parse_contribution_count(tooltip.get_text(" "))

    days.sort(key=lambda day: str(day["date"]))
    return days


def parse_contributions(markup: str) -> tuple[int | None, list[dict[str, str | int]]]:
    """Parse raw calendar markup into `(declared_total, days)`."""

    try:
        soup = BeautifulSoup(markup or "", "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning(f"Contribution markup rejected by HTML parser: {exc}")
        return None, []

    days = parse_contribution_days(soup)
    total = parse_total_contributions(soup)
    logger.debug(f"Parsed {len(days)} contribution days, declared total={total}")
    return total, days
