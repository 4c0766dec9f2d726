"""
Per-view state for the scatterplot.

A `ScatterView` owns everything the page needs between events: the loaded
points, the scales computed from them, the lifecycle status and the hover
selection. State only changes through the transition methods below.
"""
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Any, List, Optional, Sequence

from dopers.config import LAYOUT, Layout, MARKER_CONFIG
from dopers.errors import DopersError, LoadError, ParseError
from dopers.scales import Scales, compute_scales
from dopers.transformers import PlotPoint, format_time, results_to_points
from dopers.data_source import fetch_results

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    FETCHING = "fetching"
    LOADED = "loaded"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class Marker:
    point: PlotPoint
    x: float
    y: float
    color: str


def tooltip_lines(point: PlotPoint) -> List[str]:
    lines = [
        f"{point.Name}: {point.Nationality}",
        f"Year: {point.Year}, Time: {format_time(point.Time)}",
    ]
    if point.Doping != "":
        lines.append(point.Doping)
    return lines


class ScatterView:
    def __init__(self, layout: Layout = LAYOUT, tooltip_offset: int = MARKER_CONFIG["tooltip_offset"]):
        self.layout = layout
        self.tooltip_offset = tooltip_offset
        self.status = Status.FETCHING
        self.points: tuple[PlotPoint, ...] = ()
        self.scales: Optional[Scales] = None
        self.ready = False
        self.selected: Optional[PlotPoint] = None
        self.tooltip_pos: Optional[tuple[float, float]] = None
        self.error: Optional[DopersError] = None
        self.disposed = False

    # -- lifecycle ---------------------------------------------------------

    def load(self, fetch: Callable[[], Sequence[Dict[str, Any]]] = fetch_results) -> Status:
        """Fetch and load once. Load/parse failures end in the error state."""
        if self.status is not Status.FETCHING or self.disposed:
            return self.status
        try:
            records = fetch()
        except LoadError as e:
            self.fail(e)
            return self.status
        try:
            self.complete_load(records)
        except ParseError as e:
            self.fail(e)
        return self.status

    def complete_load(self, records: Sequence[Dict[str, Any]]) -> None:
        if self.disposed:
            logger.debug("View disposed before load finished; dropping %d records", len(records))
            return
        if self.status is not Status.FETCHING:
            return
        points = results_to_points(records)
        self.points = points
        if not points:
            logger.warning("Race results are empty; nothing to plot")
            self.status = Status.EMPTY
            return
        self._set_scales(compute_scales(points, self.layout))
        self.status = Status.LOADED

    def _set_scales(self, scales: Scales) -> None:
        if self.scales is not None:
            return
        self.scales = scales
        self.ready = True

    def fail(self, error: DopersError) -> None:
        logger.error("Could not load race results: %s", error, exc_info=error)
        if self.disposed:
            return
        self.error = error
        self.status = Status.ERROR
        self.selected = None
        self.tooltip_pos = None

    def dispose(self) -> None:
        self.disposed = True
        self.selected = None
        self.tooltip_pos = None

    # -- hover -------------------------------------------------------------

    @property
    def hovering(self) -> bool:
        return self.selected is not None

    def hover_enter(self, point: PlotPoint, pointer_x: float, pointer_y: float) -> None:
        if self.status is not Status.LOADED:
            return
        self.selected = point
        self.tooltip_pos = (pointer_x + self.tooltip_offset, pointer_y + self.tooltip_offset)
        logger.debug("hover enter %s (%s)", point.Name, point.Year)

    def hover_leave(self) -> None:
        if self.selected is not None:
            logger.debug("hover leave %s", self.selected.Name)
        self.selected = None

    def tooltip_lines(self) -> List[str]:
        if self.selected is None:
            return []
        return tooltip_lines(self.selected)

    # -- drawing -----------------------------------------------------------

    def marker_positions(self) -> List[Marker]:
        if not self.ready or self.scales is None:
            return []
        sc = self.scales
        return [Marker(p, sc.x(p.Year), sc.y(p.Time), sc.color(p.doped)) for p in self.points]
