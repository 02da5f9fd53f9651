"""
Points — Input data points and their placed (on-canvas) counterparts.

All points share the baseline y; the visual "height" of the schedule comes
entirely from the path. Placement is a pure function of the point sequence
and the GeometryConfig, so identical inputs give bit-identical coordinates.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, fields
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from .geometry import GeometryConfig

logger = logging.getLogger(__name__)

AGE_MARKER = "A"

# camelCase keys accepted by DataPoint.from_mapping
_KEY_ALIASES = {
    "amountLabel": "amount_label",
    "lastPayment": "last_payment",
    "divideSa": "divide_sa",
}


@dataclass(frozen=True)
class DataPoint:
    """One caller-supplied schedule entry. Sequence order is x-axis order."""
    id: str
    label: Optional[str] = None
    note: Optional[str] = None
    major: bool = False
    value: Optional[str] = None
    year: Optional[str] = None
    level: Optional[int] = None
    amount_label: Optional[str] = None
    last_payment: bool = False
    divide_sa: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'DataPoint':
        """Build from a dict, accepting camelCase keys; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, val in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = val
        kwargs["id"] = str(kwargs.get("id", ""))
        return cls(**kwargs)

    @property
    def is_age(self) -> bool:
        """True when the caption marks an age ("A60") rather than a policy year."""
        source = self.year or self.label
        return bool(source) and AGE_MARKER in source

    @property
    def caption(self) -> Optional[str]:
        """Text shown under the point: year, else label, minus the age marker."""
        source = self.year or self.label
        if not source:
            return None
        return source.replace(AGE_MARKER, "")


@dataclass(frozen=True)
class PlacedPoint(DataPoint):
    """A DataPoint with coordinates resolved for one layout pass."""
    x: float = 0.0
    y: float = 0.0
    index: int = 0


PointLike = Union[DataPoint, Mapping[str, Any]]


def coerce_points(points: Optional[Iterable[PointLike]]) -> list[DataPoint]:
    """Accept DataPoints or mappings; None becomes an empty list."""
    if points is None:
        return []
    result = []
    for p in points:
        result.append(p if isinstance(p, DataPoint) else DataPoint.from_mapping(p))
    return result


def place_points(points: Sequence[DataPoint],
                 geometry: GeometryConfig) -> tuple[PlacedPoint, ...]:
    """Assign x = margin + gap * i and y = center_y to every point."""
    placed = []
    for i, p in enumerate(points):
        values = {f.name: getattr(p, f.name) for f in fields(DataPoint)}
        placed.append(PlacedPoint(
            **values,
            x=geometry.margin + geometry.gap * i,
            y=float(geometry.center_y),
            index=i,
        ))
    return tuple(placed)


def index_by_id(points: Iterable[PlacedPoint]) -> dict[str, PlacedPoint]:
    """Id lookup table. Duplicate ids resolve last-write-wins."""
    table: dict[str, PlacedPoint] = {}
    for p in points:
        table[p.id] = p
    return table


def find_duplicate_ids(points: Iterable[DataPoint]) -> list[str]:
    counts = Counter(p.id for p in points)
    dupes = [pid for pid, n in counts.items() if n > 1]
    if dupes:
        logger.warning("Duplicate point ids %s; last occurrence wins", dupes)
    return dupes


def default_points() -> list[DataPoint]:
    """Ten-point sample schedule: policy years 1-20, then ages 60-90."""
    years = ["1", "2", "5", "10", "15", "20"]
    pts = [DataPoint(id=y, label=y, year=y) for y in years]
    for age in ("60", "70", "80"):
        pts.append(DataPoint(id=age, major=True, year=AGE_MARKER + age))
    pts.append(DataPoint(id="90", major=True, value="150,000",
                         year=AGE_MARKER + "90", last_payment=True))
    return pts
