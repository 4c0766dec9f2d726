"""
Pure data -> pixel mappings for the scatterplot.

`compute_scales` derives the domains from the points and returns callable
scales; nothing in here touches a drawing surface.
"""
from __future__ import annotations
import bisect
import math
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Sequence
import numpy as np
import seaborn as sns

from dopers.config import LAYOUT, Layout
from dopers.errors import EmptyDatasetError
from dopers.transformers import PlotPoint, format_time

# candidate tick spacings for durations, in seconds
TIME_TICK_STEPS = [1, 5, 15, 30, 60, 5 * 60, 15 * 60, 30 * 60, 3600, 3 * 3600, 6 * 3600, 12 * 3600]


def _nice_step(span: float, count: int) -> float:
    raw = span / max(count, 1)
    power = 10 ** math.floor(math.log10(raw))
    error = raw / power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * power


def _ticks_between(lo: float, hi: float, step: float) -> list[float]:
    start = math.ceil(lo / step)
    stop = math.floor(hi / step)
    return [float(v) for v in np.arange(start, stop + 1) * step]


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]
    min_step: float = 0.0

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return (d0 + d1) / 2
        return d0 + (float(pixel) - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        lo, hi = sorted(self.domain)
        if hi == lo:
            return [lo]
        step = max(_nice_step(hi - lo, count), self.min_step)
        return _ticks_between(lo, hi, step)

    def tick_format(self, value: float) -> str:
        return f"{value:.0f}"


@dataclass(frozen=True)
class TimeScale:
    """Linear scale over durations; ticks land on whole seconds/minutes."""
    domain: tuple[timedelta, timedelta]
    range: tuple[float, float]

    @property
    def _seconds(self) -> LinearScale:
        d0, d1 = self.domain
        return LinearScale((d0.total_seconds(), d1.total_seconds()), self.range)

    def __call__(self, value: timedelta) -> float:
        return self._seconds(value.total_seconds())

    def invert(self, pixel: float) -> timedelta:
        return timedelta(seconds=self._seconds.invert(pixel))

    def ticks(self, count: int = 10) -> list[timedelta]:
        lo, hi = sorted(d.total_seconds() for d in self.domain)
        if hi == lo:
            return [timedelta(seconds=lo)]
        target = (hi - lo) / count
        i = bisect.bisect_right(TIME_TICK_STEPS, target)
        if i == 0:
            step = TIME_TICK_STEPS[0]
        elif i == len(TIME_TICK_STEPS):
            step = TIME_TICK_STEPS[-1]
        else:
            prev, nxt = TIME_TICK_STEPS[i - 1], TIME_TICK_STEPS[i]
            step = prev if target / prev < nxt / target else nxt
        return [timedelta(seconds=s) for s in _ticks_between(lo, hi, step)]

    def tick_format(self, value: timedelta) -> str:
        return format_time(value)


@dataclass(frozen=True)
class ColorScale:
    """Doping allegation (bool) -> colour. Same input, same colour, always."""
    colors: tuple[str, str] = field(
        default_factory=lambda: tuple(sns.color_palette("tab10").as_hex()[:2])
    )

    def __call__(self, doped: bool) -> str:
        return self.colors[1] if doped else self.colors[0]


@dataclass(frozen=True)
class Scales:
    x: LinearScale
    y: TimeScale
    color: ColorScale


def compute_scales(points: Sequence[PlotPoint], layout: Layout = LAYOUT) -> Scales:
    if len(points) == 0:
        raise EmptyDatasetError("cannot compute scales for an empty dataset")
    years = [p.Year for p in points]
    times = [p.Time for p in points]
    x = LinearScale((min(years) - 1.0, max(years) + 1.0), layout.x_range, min_step=1.0)
    # slowest time at the bottom, fastest at the top
    y = TimeScale((max(times), min(times)), layout.y_range)
    return Scales(x=x, y=y, color=ColorScale())
