"""Trailing yield-curve inversion streak"""

from collections.abc import Sequence

from ..data.models import InversionStreak, MergedRecord


def inversion_streak(records: Sequence[MergedRecord]) -> InversionStreak:
    """
    Count the trailing run of negative differentials.

    Scans from the newest record backward and stops at the first record whose
    differential is missing or non-negative. A missing differential breaks the
    streak rather than being skipped.

    Args:
        records: Merged records in chronological order

    Returns:
        InversionStreak with the run length and the date of its earliest record
    """
    count = 0
    for record in reversed(records):
        if record.differential is None or record.differential >= 0:
            break
        count += 1

    if count == 0:
        return InversionStreak(count=0, start_date=None)

    return InversionStreak(count=count, start_date=records[len(records) - count].date)
