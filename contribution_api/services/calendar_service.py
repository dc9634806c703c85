from collections.abc import Mapping
from collections.abc import Sequence
from datetime import date
from datetime import timedelta


MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
LEVEL_COLORS = ["#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"]
DAYS_PER_WEEK = 7
PROFILE_URL_TEMPLATE = "https://github.com/{username}"


def sunday_weekday(day: date) -> int:
    """Weekday index with Sunday as 0 and Saturday as 6."""

    return (day.weekday() + 1) % 7


def count_label(count: int) -> str:
    return "1 contribution" if count == 1 else f"{count} contributions"


def tooltip_label(day: date, count: int) -> str:
    """Human readable cell label, e.g. "5 contributions on March 1, 2024"."""

    return f"{count_label(count)} on {MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def _calendar_day(
    day: date, count: int, level: int, placeholder: bool
) -> dict[str, str | int | bool]:
    return {
        "date": day.isoformat(),
        "weekday": sunday_weekday(day),
        "count": count,
        "level": level,
        "placeholder": placeholder,
    }


def build_week_grid(
    days: Sequence[Mapping[str, object]],
) -> list[list[dict[str, str | int | bool]]]:
    """Expand sparse day records into complete Sunday-to-Saturday weeks.

    Dates missing between the first and last real day, and the days that pad
    the final week out to Saturday, are zero-count placeholders.
    """

    real_days: dict[date, Mapping[str, object]] = {}
    for item in days:
        raw_day = item.get("date")
        if not isinstance(raw_day, str):
            continue
        try:
            parsed_day = date.fromisoformat(raw_day)
        except ValueError:
            continue
        real_days.setdefault(parsed_day, item)

    if not real_days:
        return []

    first = min(real_days)
    last = max(real_days)
    cursor = first - timedelta(days=sunday_weekday(first))
    # Walk through the Saturday that closes the last real day's week.
    end = last + timedelta(days=DAYS_PER_WEEK - 1 - sunday_weekday(last))

    weeks: list[list[dict[str, str | int | bool]]] = []
    current_week: list[dict[str, str | int | bool]] = []
    while cursor <= end:
        item = real_days.get(cursor)
        if item is None:
            current_week.append(_calendar_day(cursor, 0, 0, placeholder=True))
        else:
            count = item.get("count")
            level = item.get("level")
            current_week.append(
                _calendar_day(
                    cursor,
                    count if isinstance(count, int) else 0,
                    min(max(level, 0), 4) if isinstance(level, int) else 0,
                    placeholder=False,
                )
            )

        if len(current_week) == DAYS_PER_WEEK:
            weeks.append(current_week)
            current_week = []
        cursor += timedelta(days=1)

    return weeks


def build_month_markers(
    weeks: Sequence[Sequence[Mapping[str, object]]],
) -> list[dict[str, str | int]]:
    """Mark the first week containing the 1st of each month, once per month."""

    seen_months: set[int] = set()
    markers: list[dict[str, str | int]] = []

    for week_index, week in enumerate(weeks):
        for item in week:
            day = date.fromisoformat(str(item["date"]))
            if day.day != 1 or day.month in seen_months:
                continue
            seen_months.add(day.month)
            markers.append(
                {"week_index": week_index, "month_label": MONTH_LABELS[day.month - 1]}
            )

    return markers


def build_calendar_payload(result: Mapping[str, object]) -> dict[str, object]:
    """Attach the rendered-calendar structures to a contribution result."""

    raw_days = result.get("days")
    weeks = build_week_grid(raw_days if isinstance(raw_days, list) else [])

    for week in weeks:
        for item in week:
            item["tooltip"] = tooltip_label(
                date.fromisoformat(str(item["date"])), int(item["count"])
            )

    username = str(result["username"])
    return {
        "username": username,
        "total": result["total"],
        "updatedAt": result["updatedAt"],
        "profile_url": PROFILE_URL_TEMPLATE.format(username=username),
        "weeks": [
            {"week_start": week[0]["date"], "days": week} for week in weeks
        ],
        "month_markers": build_month_markers(weeks),
        "legend": LEVEL_COLORS,
    }
