r"""
PathBuilder — One connected path through every placed point.

Segments are numbered by the index of their END point, so segment i runs
from points[i-1] to points[i] and numbers go 1 .. n-1.

Zigzag segment (x0 → x1 on baseline b, amplitude A, L = x1 - x0):
=================================================================

         lead   step step step step         lead
        ◄────►  ◄──►◄──►◄──►◄──►            ◄────►
                    /\                                   y = b - A
    ●──────────────/  \    /───────────────────────●     y = b
                       \  /
                        \/                               y = b + A

    lead = clamp(min(A, L/6), 0)      straight lead-in / lead-out
    span = L - 2·lead                 divided in thirds: peak + crossing,
    step = span / 6                   trough + crossing, straight run
    peak at b - A, trough at b + A

Alternating segment: a single mid-point deflection, up on odd segments and
down on even ones, damped when either endpoint is a major point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from .config import DEFAULT_ZIGZAG_SEGMENTS, SegmentPolicy
from .points import PlacedPoint

Vertex = tuple[float, float]


@dataclass(frozen=True)
class PathSegment:
    """Vertices emitted for one segment, excluding its start point."""
    index: int
    kind: str                   # "straight" | "zigzag" | "deflect"
    start: Vertex
    vertices: tuple[Vertex, ...]

    @property
    def end(self) -> Vertex:
        return self.vertices[-1]


@dataclass(frozen=True)
class ChartPath:
    """Path description: a move-to followed by line-to commands."""
    commands: tuple[tuple[str, float, float], ...] = ()
    segments: tuple[PathSegment, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.commands

    @property
    def start(self) -> Vertex | None:
        if not self.commands:
            return None
        return (self.commands[0][1], self.commands[0][2])

    @property
    def end(self) -> Vertex | None:
        if not self.commands:
            return None
        return (self.commands[-1][1], self.commands[-1][2])

    @property
    def vertices(self) -> np.ndarray:
        """(N, 2) float64 array of every command coordinate."""
        if not self.commands:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([(x, y) for _, x, y in self.commands], dtype=np.float64)

    @property
    def d(self) -> str:
        """SVG path data, e.g. "M 40 160 L 140 160"."""
        return " ".join(f"{op} {_fmt(x)} {_fmt(y)}" for op, x, y in self.commands)


class PathBuilder:
    """
    Walks placed points pairwise and emits the chart path.

    Usage:
        builder = PathBuilder(SegmentPolicy.INDEX, {4, 5, 7}, amplitude=20)
        path = builder.build(placed_points)
        path.d   # "M 40 160 L 140 160 ..."
    """

    def __init__(
        self,
        policy: SegmentPolicy | str = SegmentPolicy.INDEX,
        zigzag_segments: Iterable[int] = DEFAULT_ZIGZAG_SEGMENTS,
        amplitude: float = 20.0,
        major_damping: float = 0.5,
    ):
        self.policy = SegmentPolicy(policy)
        self.zigzag_segments = frozenset(zigzag_segments)
        self.amplitude = max(0.0, float(amplitude))
        self.major_damping = min(1.0, max(0.0, float(major_damping)))

    def build(self, points: Sequence[PlacedPoint]) -> ChartPath:
        if not points:
            return ChartPath()

        first = points[0]
        commands = [("M", first.x, first.y)]
        segments = []

        for i in range(1, len(points)):
            prev, cur = points[i - 1], points[i]
            kind, verts = self._segment(i, prev, cur)
            segments.append(PathSegment(
                index=i, kind=kind, start=(prev.x, prev.y), vertices=verts))
            commands.extend(("L", x, y) for x, y in verts)

        return ChartPath(commands=tuple(commands), segments=tuple(segments))

    def segment_kind(self, index: int) -> str:
        """Kind of segment `index` under the current policy."""
        if self.policy == SegmentPolicy.ALTERNATING:
            return "deflect"
        return "zigzag" if index in self.zigzag_segments else "straight"

    # ──────────────────────────────────────────────────────
    # Segment strategies
    # ──────────────────────────────────────────────────────
    def _segment(self, index: int, prev: PlacedPoint,
                 cur: PlacedPoint) -> tuple[str, tuple[Vertex, ...]]:
        kind = self.segment_kind(index)
        if kind == "zigzag":
            return kind, zigzag_vertices(prev.x, cur.x, prev.y, self.amplitude)
        if kind == "deflect":
            amp = self.amplitude
            if prev.major or cur.major:
                amp *= self.major_damping
            direction = -1.0 if index % 2 else 1.0
            mid_x = (prev.x + cur.x) / 2
            return kind, ((mid_x, prev.y + direction * amp), (cur.x, cur.y))
        return kind, ((cur.x, cur.y),)


def zigzag_vertices(x0: float, x1: float, baseline: float,
                    amplitude: float) -> tuple[Vertex, ...]:
    """Peak-then-trough detour from x0 to x1, returning to the baseline at x1."""
    length = max(0.0, x1 - x0)
    amplitude = max(0.0, amplitude)
    lead = max(0.0, min(amplitude, length / 6))
    span = max(0.0, length - 2 * lead)
    step = span / 6

    start = x0 + lead
    return (
        (start, baseline),
        (start + step, baseline - amplitude),
        (start + 2 * step, baseline),
        (start + 3 * step, baseline + amplitude),
        (start + 4 * step, baseline),
        (x1 - lead, baseline),
        (x1, baseline),
    )


def _fmt(v: float) -> str:
    text = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
