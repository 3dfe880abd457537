from datetime import date, timedelta

from streak_tracker.features.streaks.engine import compute_streaks, missed_days, segment_runs

TODAY = date(2024, 6, 10)


def d(day: int, month: int = 6) -> date:
    return date(2024, month, day)


def test_empty_log_has_no_streaks_and_no_missed_days():
    assert compute_streaks(set(), TODAY) == (0, 0)
    assert missed_days(set(), TODAY) == []


def test_segment_runs_splits_on_gaps():
    runs = segment_runs({d(5), d(1), d(2)})
    assert [(r.start_date, r.end_date, r.length) for r in runs] == [
        (d(1), d(2), 2),
        (d(5), d(5), 1),
    ]


def test_segment_runs_collapses_duplicates():
    runs = segment_runs([d(3), d(3), d(4)])
    assert len(runs) == 1
    assert runs[0].length == 2


def test_streak_ending_today_is_current():
    current, longest = compute_streaks({d(8), d(9), d(10)}, TODAY)
    assert current == 3
    assert longest == 3


def test_streak_ending_yesterday_is_still_alive():
    assert compute_streaks({d(9)}, TODAY) == (1, 1)


def test_streak_broken_when_last_check_in_older_than_yesterday():
    current, longest = compute_streaks({d(1), d(2), d(5)}, TODAY)
    assert longest == 2
    assert current == 0


def test_only_trailing_run_counts_as_current():
    # A long earlier run never becomes current, even when longer.
    dates = {d(1), d(2), d(3), d(4), d(9), d(10)}
    assert compute_streaks(dates, TODAY) == (2, 4)


def test_streak_continuity_with_gap_before_yesterday():
    assert compute_streaks({d(5), d(9), d(10)}, TODAY)[0] == 2


def test_runs_cross_month_boundaries():
    dates = {date(2024, 5, 30), date(2024, 5, 31), date(2024, 6, 1)}
    assert compute_streaks(dates, date(2024, 6, 1)) == (3, 3)


def test_missed_days_scenario_window_30():
    missed = missed_days({d(1), d(2), d(5)}, TODAY, window_days=30)
    assert missed == [d(3), d(4), d(6), d(7), d(8), d(9)]


def test_missed_days_never_include_today_or_days_before_first_check_in():
    first = d(7)
    missed = missed_days({first}, TODAY)
    assert missed == [d(8), d(9)]
    assert TODAY not in missed
    assert all(first <= day < TODAY for day in missed)


def test_missed_days_limited_to_window():
    first = TODAY - timedelta(days=100)
    missed = missed_days({first}, TODAY, window_days=7)
    assert missed == [TODAY - timedelta(days=i) for i in range(7, 0, -1)]


def test_missed_days_empty_for_non_positive_window():
    assert missed_days({d(1)}, TODAY, window_days=0) == []
    assert missed_days({d(1)}, TODAY, window_days=-3) == []


def test_missed_days_sorted_ascending():
    missed = missed_days({d(1, 5)}, TODAY)
    assert missed == sorted(missed)
    assert len(missed) == 30
