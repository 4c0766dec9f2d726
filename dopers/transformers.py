from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Any, Iterable, Optional
import pandas as pd

from dopers.errors import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlotPoint:
    Name: str
    Nationality: str
    Year: int
    Time: timedelta
    Doping: str
    Place: Optional[int] = None
    URL: str = ""

    @property
    def doped(self) -> bool:
        return self.Doping != ""


def parse_time(value: str) -> timedelta:
    """Parse "MM:SS" into an elapsed duration, not a time of day."""
    parts = str(value).split(":")
    if len(parts) != 2 or not all(p.strip().isascii() and p.strip().isdigit() for p in parts):
        raise ParseError(f"time {value!r} is not MM:SS")
    minutes, seconds = (int(p) for p in parts)
    if seconds >= 60:
        raise ParseError(f"time {value!r} has {seconds} seconds")
    return timedelta(minutes=minutes, seconds=seconds)


def format_time(value: timedelta) -> str:
    total = int(value.total_seconds())
    m, s = divmod(total, 60)
    return f"{m:02d}:{s:02d}"


def parse_year(value: Any) -> int:
    if isinstance(value, bool):
        raise ParseError(f"year {value!r} is not numeric")
    if isinstance(value, int):
        return value
    try:
        num = float(str(value).strip())
    except ValueError:
        raise ParseError(f"year {value!r} is not numeric") from None
    if not math.isfinite(num) or not num.is_integer():
        raise ParseError(f"year {value!r} is not a whole number")
    return int(num)


def _parse_place(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def transform(raw: Dict[str, Any]) -> PlotPoint:
    return PlotPoint(
        Name=str(raw.get("Name", "")),
        Nationality=str(raw.get("Nationality", "")),
        Year=parse_year(raw.get("Year")),
        Time=parse_time(raw.get("Time")),
        Doping=str(raw.get("Doping") or ""),
        Place=_parse_place(raw.get("Place")),
        URL=str(raw.get("URL") or ""),
    )


def results_to_points(records: Iterable[Dict[str, Any]]) -> tuple[PlotPoint, ...]:
    """
    Transform every record, keeping order. One bad record fails the whole batch.
    """
    points = []
    for i, rec in enumerate(records):
        try:
            points.append(transform(rec))
        except ParseError as e:
            raise ParseError(f"record {i} ({rec.get('Name', '?')}): {e}") from e
    logger.debug("Transformed %d records", len(points))
    return tuple(points)


def points_to_df(points: Iterable[PlotPoint]) -> pd.DataFrame:
    rows = []
    for p in points:
        rows.append({
            "name": p.Name,
            "nationality": p.Nationality,
            "year": p.Year,
            "time": p.Time,
            "seconds": int(p.Time.total_seconds()),
            "time_label": format_time(p.Time),
            "doping": p.Doping,
            "doped": p.doped,
            "place": p.Place,
            "url": p.URL,
        })
    cols = ["name", "nationality", "year", "time", "seconds", "time_label",
            "doping", "doped", "place", "url"]
    return pd.DataFrame(rows, columns=cols)
