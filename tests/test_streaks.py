from datetime import date, timedelta

from growth_diary.stats.streaks import current_streak, longest_streak

TODAY = date(2026, 3, 10)


def _days(*offsets):
    return {TODAY - timedelta(days=n) for n in offsets}


def test_no_activity():
    assert current_streak(set(), TODAY) == 0
    assert longest_streak(set()) == 0


def test_streak_including_today():
    assert current_streak(_days(0, 1, 2), TODAY) == 3


def test_quiet_today_counts_from_yesterday():
    assert current_streak(_days(1, 2, 3), TODAY) == 3


def test_gap_before_yesterday_breaks_streak():
    assert current_streak(_days(2, 3, 4), TODAY) == 0


def test_streak_stops_at_first_gap():
    assert current_streak(_days(0, 1, 3, 4, 5), TODAY) == 2


def test_longest_streak_picks_longest_run():
    assert longest_streak(_days(0, 1, 5, 6, 7, 8, 20)) == 4


def test_longest_streak_single_day():
    assert longest_streak(_days(3)) == 1


def test_streak_across_month_boundary():
    days = {date(2026, 2, 27), date(2026, 2, 28), date(2026, 3, 1)}
    assert current_streak(days, date(2026, 3, 1)) == 3
    assert longest_streak(days) == 3
