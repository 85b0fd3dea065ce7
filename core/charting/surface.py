"""Render-lifecycle contracts between a mounted chart and its renderer.

The renderer (scale math, canvas primitives, animation loop) is an external
collaborator. Each redraw it hands the chart a `RenderFrame` describing the
live axis pixel geometry, the active hover points and a drawing context. A
`MountedChart` owns the hooks passed at construction and runs them before the
renderer draws its primary content; there is no process-wide registry.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .builder import tooltip_lines
from .schema import ChartConfig


class DrawingContext(Protocol):
    """Canvas-like 2D drawing context."""

    line_width: float
    stroke_style: str

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...


class ActivePoint(Protocol):
    """A hovered element as resolved by the renderer."""

    @property
    def index(self) -> int: ...

    @property
    def x(self) -> float: ...


class AxisGeometry(Protocol):
    """Pixel bounds of a laid-out axis."""

    @property
    def top(self) -> float: ...

    @property
    def bottom(self) -> float: ...


@dataclass(frozen=True, slots=True)
class HoverPoint:
    """Concrete ActivePoint."""

    index: int
    x: float


@dataclass(frozen=True, slots=True)
class AxisBounds:
    """Concrete AxisGeometry."""

    top: float
    bottom: float


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Renderer state for a single draw pass.

    Args:
        ctx: Drawing context for this pass.
        active_points: Renderer's current hover list (empty when nothing is hovered).
        scales: Live axis geometry keyed by scale id (`y1`, `y2`, ...).
    """

    ctx: DrawingContext
    active_points: Sequence[ActivePoint] = ()
    scales: Mapping[str, AxisGeometry] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class HoverState:
    """Transient record of the hovered sample index."""

    index: int | None = None

    @classmethod
    def from_frame(cls, frame: RenderFrame) -> HoverState:
        """Read the hovered index from a frame's first active point."""

        if not frame.active_points:
            return cls()
        return cls(index=frame.active_points[0].index)


class RenderHook(Protocol):
    """Extension invoked once per render pass before primary content."""

    def before_draw(self, frame: RenderFrame) -> None: ...


class Renderer(Protocol):
    """Draws a ChartConfig's primary content (lines, axes, legend)."""

    def draw(self, config: ChartConfig, frame: RenderFrame) -> None: ...


class MountedChart:
    """A ChartConfig bound to a renderer and an explicit list of hooks."""

    def __init__(
        self,
        config: ChartConfig,
        *,
        renderer: Renderer,
        hooks: Sequence[RenderHook] = (),
    ) -> None:
        """Initialize a mounted chart.

        Args:
            config: Immutable chart config to draw.
            renderer: Renderer responsible for primary content.
            hooks: Hooks run before every primary draw, in order.
        """

        self.config = config
        self._renderer = renderer
        self._hooks = tuple(hooks)

    @property
    def hooks(self) -> tuple[RenderHook, ...]:
        """Return the hooks owned by this chart."""

        return self._hooks

    def draw(self, frame: RenderFrame) -> None:
        """Run one render pass: hooks first, then primary content."""

        for hook in self._hooks:
            hook.before_draw(frame)
        self._renderer.draw(self.config, frame)

    def tooltip(self, frame: RenderFrame) -> list[str]:
        """Return tooltip lines for the frame's hovered sample."""

        return tooltip_lines(self.config, HoverState.from_frame(frame).index)
