from datetime import date
from datetime import timedelta

from contribution_api.services.calendar_service import build_calendar_payload
from contribution_api.services.calendar_service import build_month_markers
from contribution_api.services.calendar_service import build_week_grid
from contribution_api.services.calendar_service import tooltip_label


def make_days(start: date, count: int, step: int = 1) -> list[dict[str, str | int]]:
    return [
        {"date": (start + timedelta(days=offset)).isoformat(), "count": 1, "level": 1}
        for offset in range(0, count * step, step)
    ]


def assert_complete_grid(weeks, first_real: date, last_real: date) -> None:
    flat = [date.fromisoformat(item["date"]) for week in weeks for item in week]

    assert all(len(week) == 7 for week in weeks)
    assert all(date.fromisoformat(week[0]["date"]).weekday() == 6 for week in weeks)
    assert all(
        later - earlier == timedelta(days=1) for earlier, later in zip(flat, flat[1:])
    )
    assert flat[0] <= first_real
    assert flat[-1] >= last_real
    assert flat[-1].weekday() == 5


def test_build_week_grid_returns_empty_for_no_days() -> None:
    assert build_week_grid([]) == []
    assert build_month_markers([]) == []


def test_build_week_grid_aligns_to_sunday_and_pads_to_saturday() -> None:
    days = [
        {"date": "2024-02-28", "count": 1, "level": 1},
        {"date": "2024-03-01", "count": 5, "level": 2},
        {"date": "2024-03-04", "count": 12, "level": 3},
    ]

    weeks = build_week_grid(days)

    assert [week[0]["date"] for week in weeks] == ["2024-02-25", "2024-03-03"]
    assert_complete_grid(weeks, date(2024, 2, 28), date(2024, 3, 4))
    assert weeks[0][0] == {
        "date": "2024-02-25",
        "weekday": 0,
        "count": 0,
        "level": 0,
        "placeholder": True,
    }
    assert weeks[0][5] == {
        "date": "2024-03-01",
        "weekday": 5,
        "count": 5,
        "level": 2,
        "placeholder": False,
    }
    assert weeks[0][6]["placeholder"] is True
    assert weeks[1][1]["count"] == 12
    assert [item["placeholder"] for item in weeks[1][2:]] == [True] * 5


def test_build_week_grid_keeps_real_zero_days_distinct_from_placeholders() -> None:
    weeks = build_week_grid([{"date": "2024-03-03", "count": 0, "level": 0}])

    assert len(weeks) == 1
    assert weeks[0][0]["placeholder"] is False
    assert all(item["placeholder"] for item in weeks[0][1:])


def test_build_week_grid_covers_a_full_year() -> None:
    start = date(2023, 10, 19)
    days = make_days(start, 366)

    weeks = build_week_grid(days)

    assert_complete_grid(weeks, start, start + timedelta(days=365))
    real = [item for week in weeks for item in week if not item["placeholder"]]
    assert len(real) == 366


def test_build_week_grid_fills_sparse_input_without_gaps() -> None:
    start = date(2024, 1, 3)
    days = make_days(start, 20, step=9)

    weeks = build_week_grid(days)

    assert_complete_grid(weeks, start, start + timedelta(days=19 * 9))


def test_build_week_grid_skips_unparseable_dates() -> None:
    weeks = build_week_grid(
        [
            {"date": "not-a-date", "count": 3, "level": 1},
            {"date": "2024-03-06", "count": 2, "level": 9},
        ]
    )

    assert len(weeks) == 1
    assert weeks[0][3]["date"] == "2024-03-06"
    assert weeks[0][3]["level"] == 4


def test_build_month_markers_marks_each_month_once() -> None:
    weeks = build_week_grid(make_days(date(2023, 1, 1), 500))

    markers = build_month_markers(weeks)
    labels = [marker["month_label"] for marker in markers]

    assert len(labels) == len(set(labels)) == 12
    assert markers[0] == {"week_index": 0, "month_label": "Jan"}
    assert markers[1] == {"week_index": 4, "month_label": "Feb"}
    assert [marker["week_index"] for marker in markers] == sorted(
        marker["week_index"] for marker in markers
    )


def test_build_month_markers_uses_week_of_the_first() -> None:
    weeks = build_week_grid(
        [
            {"date": "2024-02-28", "count": 1, "level": 1},
            {"date": "2024-03-04", "count": 1, "level": 1},
        ]
    )

    assert build_month_markers(weeks) == [{"week_index": 0, "month_label": "Mar"}]


def test_tooltip_label_pluralizes_count() -> None:
    assert tooltip_label(date(2024, 3, 1), 1) == "1 contribution on March 1, 2024"
    assert tooltip_label(date(2024, 3, 1), 0) == "0 contributions on March 1, 2024"
    assert tooltip_label(date(2024, 12, 25), 7) == "7 contributions on December 25, 2024"


def test_build_calendar_payload_combines_grid_and_metadata() -> None:
    result = {
        "username": "octocat",
        "total": 6,
        "days": [
            {"date": "2024-03-01", "count": 5, "level": 2},
            {"date": "2024-03-04", "count": 1, "level": 1},
        ],
        "updatedAt": "2024-03-05T00:00:00+00:00",
    }

    payload = build_calendar_payload(result)

    assert payload["username"] == "octocat"
    assert payload["total"] == 6
    assert payload["profile_url"] == "https://github.com/octocat"
    assert payload["legend"] == ["#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"]
    assert [week["week_start"] for week in payload["weeks"]] == [
        "2024-02-25",
        "2024-03-03",
    ]
    assert payload["weeks"][0]["days"][5]["tooltip"] == "5 contributions on March 1, 2024"
    assert payload["month_markers"] == [{"week_index": 0, "month_label": "Mar"}]
