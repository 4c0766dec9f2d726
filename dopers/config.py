"""
Settings for the dopers scatterplot.

Values can be overridden through DOPERS_* environment variables or a .env
file in the working directory.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))


def _env_timeout(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


# Data source
DATA_CONFIG: Dict[str, Any] = {
    "url": os.getenv(
        "DOPERS_DATA_URL",
        "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/cyclist-data.json",
    ),
    "timeout": _env_timeout("DOPERS_HTTP_TIMEOUT"),   # seconds, None = wait forever
    "user_agent": "dopers-scatterplot/1.0",
}


@dataclass(frozen=True)
class Margin:
    top: int = 100
    right: int = 20
    bottom: int = 30
    left: int = 60


@dataclass(frozen=True)
class Layout:
    width: int = 900
    height: int = 600
    margin: Margin = field(default_factory=Margin)

    @property
    def x_range(self) -> tuple[float, float]:
        return (0.0, float(self.width - self.margin.left - self.margin.right))

    @property
    def y_range(self) -> tuple[float, float]:
        # first value is where the domain start lands (bottom of the plot)
        return (float(self.height - self.margin.top - self.margin.bottom), float(self.margin.top))


LAYOUT = Layout()

# Markers & tooltip
MARKER_CONFIG: Dict[str, Any] = {
    "radius": 6,
    "tooltip_offset": 28,   # px, applied to both pointer axes
}

# Logging
LOGGING_CONFIG: Dict[str, Any] = {
    "level": os.getenv("DOPERS_LOG_LEVEL", "INFO"),
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
