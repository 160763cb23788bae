import math
from collections import namedtuple
from datetime import datetime

import pandas as pd

SeriesPoint = namedtuple('SeriesPoint', ['date', 'actual', 'normal'])


def parse_coordinate(text, name="coordinate", bound=None):
    """Parses a text-box coordinate; `bound` limits it to [-bound, bound]."""
    try:
        value = float(str(text).strip())
    except ValueError:
        raise ValueError(f"Invalid {name}: '{text}'")
    if not math.isfinite(value):
        raise ValueError(f"Invalid {name}: '{text}'")
    if bound is not None and abs(value) > bound:
        raise ValueError(f"{name.capitalize()} {value} is outside [-{bound}, {bound}]")
    return value


def series_points(rows):
    """
    Turns rows fetched from Earth Engine ({'date', 'actual', 'normal'}) into
    SeriesPoints in date order. A day without a historical value charts as 0,
    a masked actual value as NaN.
    """
    points = []
    for row in rows:
        day = datetime.strptime(row['date'], "%Y-%m-%d").date()
        actual = row.get('actual')
        normal = row.get('normal')
        points.append(SeriesPoint(
            day,
            float('nan') if actual is None else float(actual),
            0.0 if normal is None else float(normal),
        ))
    return sorted(points, key=lambda p: p.date)


def series_names(target, baseline):
    return (f"Actual ({target.start.year})", f"Historical Normal ({baseline.label()})")


def series_frame(points, actual_label="Actual", normal_label="Historical Normal"):
    df = pd.DataFrame(
        [(pd.Timestamp(p.date), p.actual, p.normal) for p in points],
        columns=['Date', actual_label, normal_label],
    )
    return df.set_index('Date')


def chart_title(target, lon, lat):
    return f"Daily Rainfall: {target.label()}\nLocation: Lat: {lat:.3f}, Lon: {lon:.3f}"
