from dataclasses import dataclass
from datetime import date, timedelta

PENTAD_STARTS = (1, 6, 11, 16, 21, 26)
MAX_WINDOW_DAYS = 366


@dataclass(frozen=True)
class DateRange:
    """Half-open [start, end) day range."""
    start: date
    end: date

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Empty date range: {self.start} to {self.end}")

    @classmethod
    def inclusive(cls, first, last):
        if last < first:
            raise ValueError(f"End date {last} is before start date {first}")
        return cls(first, last + timedelta(days=1))

    @property
    def last(self):
        return self.end - timedelta(days=1)

    @property
    def days(self):
        return (self.end - self.start).days

    @property
    def start_str(self):
        return self.start.strftime("%Y-%m-%d")

    @property
    def end_str(self):
        return self.end.strftime("%Y-%m-%d")

    def dates(self):
        return [self.start + timedelta(days=i) for i in range(self.days)]

    def label(self):
        return f"{self.start_str} to {self.last.strftime('%Y-%m-%d')}"


def shift_year(day, year):
    # Feb 29 has no counterpart in non-leap years
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


@dataclass(frozen=True)
class BaselineWindow:
    """Calendar years whose copies of the target window form the baseline."""
    first_year: int
    last_year: int

    def __post_init__(self):
        if self.first_year > self.last_year:
            raise ValueError(f"Baseline start year {self.first_year} is after end year {self.last_year}")

    @property
    def years(self):
        return list(range(self.first_year, self.last_year + 1))

    def label(self):
        return f"{self.first_year}-{self.last_year}"

    def as_range(self):
        return DateRange(date(self.first_year, 1, 1), date(self.last_year + 1, 1, 1))

    def windows(self, target):
        """
        Shifts the target range into each baseline year. A target that crosses
        New Year keeps its span, so the shifted copy ends in the following year.
        """
        if target.days > MAX_WINDOW_DAYS:
            raise ValueError(f"Target range spans {target.days} days; the baseline needs at most {MAX_WINDOW_DAYS}")
        spill = target.last.year - target.start.year
        out = []
        for y in self.years:
            first = shift_year(target.start, y)
            last = shift_year(target.last, y + spill)
            out.append(DateRange.inclusive(first, last))
        return out

    def data_span(self, target):
        """First to last day of data the baseline reads, New Year spill included."""
        windows = self.windows(target)
        return DateRange(windows[0].start, windows[-1].end)


def overlaps(target, baseline):
    """True when any baseline window shares a day with the target range."""
    return any(w.start < target.end and target.start < w.end for w in baseline.windows(target))


def is_pentad_start(day):
    return day.day in PENTAD_STARTS


def pentad_range(day):
    """The CHIRPS pentad holding `day`; the sixth pentad runs to month end."""
    start_day = max(s for s in PENTAD_STARTS if s <= day.day)
    start = day.replace(day=start_day)
    if start_day == PENTAD_STARTS[-1]:
        end = date(day.year + 1, 1, 1) if day.month == 12 else date(day.year, day.month + 1, 1)
    else:
        end = start + timedelta(days=5)
    return DateRange(start, end)


def compare_window(start, num_days):
    if num_days < 1:
        raise ValueError(f"Number of days must be at least 1, got {num_days}")
    return DateRange(start, start + timedelta(days=num_days))
