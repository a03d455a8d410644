from datetime import date, timedelta
from typing import Iterable, Set


def current_streak(active_dates: Iterable[date], today: date) -> int:
    """
    Consecutive active days counted backward from today. A quiet today does
    not break the streak; counting then starts from yesterday.
    """
    days: Set[date] = set(active_dates)
    check = today if today in days else today - timedelta(days=1)
    streak = 0
    while check in days:
        streak += 1
        check -= timedelta(days=1)
    return streak


def longest_streak(active_dates: Iterable[date]) -> int:
    """Longest run of consecutive active days ever recorded."""
    days = sorted(set(active_dates))
    if not days:
        return 0

    longest = current = 1
    for previous, day in zip(days, days[1:]):
        if (day - previous).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest
