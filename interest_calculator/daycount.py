"""
Day-Count Engine Module

Converts a date span into a year fraction under each supported convention.
ACT/ACT and the 30/365-6 hybrid walk the span one calendar year at a time so
that leap years use a 366-day denominator. The hybrid convention accrues
interest directly because its denominator changes inside the span.
"""

from decimal import Decimal
from datetime import date, timedelta
from dataclasses import dataclass
from typing import Callable, Iterator, Optional
import calendar

from .methods import Convention


DAYS_360 = Decimal('360')
DAYS_365 = Decimal('365')
DAYS_366 = Decimal('366')


@dataclass(frozen=True)
class YearSegment:
    """Part of a date span that falls inside one calendar year"""
    year: int
    start: date
    end: date

    @property
    def denominator(self) -> Decimal:
        return year_denominator(self.year)


@dataclass(frozen=True)
class DayCountResult:
    """
    Output of the day-count engine

    year_fraction is None for the 30/365-6 hybrid, which produces
    accrued_interest instead.
    """
    display_days: int
    year_fraction: Optional[Decimal] = None
    accrued_interest: Optional[Decimal] = None


def year_denominator(year: int) -> Decimal:
    """366 for leap years, 365 otherwise"""
    return DAYS_366 if calendar.isleap(year) else DAYS_365


def year_segments(
    start: date,
    end: date,
    start_inclusive: bool = True,
    end_inclusive: bool = False
) -> Iterator[YearSegment]:
    """
    Split a date span into calendar-year segments

    Args:
        start: First date of the span
        end: Last date of the span
        start_inclusive: If False the first segment begins the day after start
        end_inclusive: If True segments close on Dec-31 (both bounds counted);
            if False they close on the following Jan-1 (exclusive bound)

    Yields:
        Non-empty YearSegment per calendar year touched, in order
    """
    first = start if start_inclusive else start + timedelta(days=1)

    for year in range(start.year, end.year + 1):
        seg_start = first if year == start.year else date(year, 1, 1)

        if year == end.year:
            seg_end = end
        elif end_inclusive:
            seg_end = date(year, 12, 31)
        else:
            seg_end = date(year + 1, 1, 1)

        if seg_end > seg_start or (end_inclusive and seg_end == seg_start):
            yield YearSegment(year, seg_start, seg_end)


def inclusive_days(segment: YearSegment) -> int:
    """Actual days with both bounds counted"""
    return (segment.end - segment.start).days + 1


def _thirty_day(value: date, february_end_bump: bool) -> int:
    day = value.day
    if february_end_bump and value.month == 2 and day == calendar.monthrange(value.year, 2)[1]:
        return 30
    return min(day, 30)


def thirty_grid_days(start: date, end: date, february_end_bump: bool = False) -> int:
    """
    Days between two dates on a 30-day-per-month grid

    Day-of-month is capped at 30. With february_end_bump the last day of
    February also counts as day 30 (European 30/360).
    """
    d1 = _thirty_day(start, february_end_bump)
    d2 = _thirty_day(end, february_end_bump)
    return (end.year - start.year) * 360 + (end.month - start.month) * 30 + (d2 - d1)


def segment_thirty_days(segment: YearSegment) -> int:
    return thirty_grid_days(segment.start, segment.end)


def accumulate_segments(
    start: date,
    end: date,
    metric: Callable[[YearSegment], Decimal],
    start_inclusive: bool = True,
    end_inclusive: bool = False
) -> Decimal:
    """Sum a per-segment metric over the calendar-year segments of a span"""
    total = Decimal('0')
    for segment in year_segments(start, end, start_inclusive, end_inclusive):
        total += metric(segment)
    return total


def act_act(start: date, end: date) -> DayCountResult:
    """ACT/ACT: each year's actual days over that year's length"""
    fraction = Decimal('0')
    days = 0
    for segment in year_segments(start, end, start_inclusive=False, end_inclusive=True):
        segment_days = inclusive_days(segment)
        fraction += Decimal(segment_days) / segment.denominator
        days += segment_days
    return DayCountResult(display_days=days, year_fraction=fraction)


def act_fixed(start: date, end: date, denominator: Decimal) -> DayCountResult:
    days = (end - start).days
    return DayCountResult(display_days=days, year_fraction=Decimal(days) / denominator)


def thirty_fixed(start: date, end: date, denominator: Decimal,
                 february_end_bump: bool) -> DayCountResult:
    days = thirty_grid_days(start, end, february_end_bump)
    return DayCountResult(display_days=days, year_fraction=Decimal(days) / denominator)


def thirty_365_hybrid(start: date, end: date, principal: Decimal, rate: Decimal) -> DayCountResult:
    """
    30/365-6: 30-grid days per calendar year over 365 or 366

    Interest is accrued per segment because the denominator changes at each
    year boundary. Display days come from a separate pass over the same
    segmentation that sums only the grid days.
    """
    accrued = accumulate_segments(
        start, end,
        lambda segment: principal * rate * (Decimal(segment_thirty_days(segment)) / segment.denominator)
    )
    display_days = sum(segment_thirty_days(segment) for segment in year_segments(start, end))
    return DayCountResult(display_days=display_days, accrued_interest=accrued)


def compute_day_count(
    convention: Convention,
    start: date,
    end: date,
    principal: Decimal,
    rate: Decimal
) -> DayCountResult:
    """
    Day count for a convention and date span

    Args:
        convention: Day-count convention
        start: Start date
        end: End date, strictly after start
        principal: Principal, used only by the 30/365-6 hybrid
        rate: Rate as a decimal fraction, used only by the 30/365-6 hybrid

    Returns:
        DayCountResult. COMPOUND returns the ACT/ACT fraction, which the
        interest calculator uses as the compounding exponent.
    """
    if convention in (Convention.ACT_ACT, Convention.COMPOUND):
        return act_act(start, end)
    elif convention == Convention.ACT_365:
        return act_fixed(start, end, DAYS_365)
    elif convention == Convention.ACT_360:
        return act_fixed(start, end, DAYS_360)
    elif convention == Convention.THIRTY_360:
        return thirty_fixed(start, end, DAYS_360, february_end_bump=True)
    elif convention == Convention.THIRTY_365:
        return thirty_fixed(start, end, DAYS_365, february_end_bump=False)
    elif convention == Convention.THIRTY_365_HYBRID:
        return thirty_365_hybrid(start, end, principal, rate)
    else:
        raise ValueError(f"Unsupported convention: {convention}")
