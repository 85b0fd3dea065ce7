"""Crosshair overlay: a vertical hover indicator drawn before each render pass."""

from __future__ import annotations

from .schema import ChartConfig, CrosshairConfig
from .surface import MountedChart, RenderFrame, Renderer


class CrosshairOverlay:
    """Draw a vertical line at the hovered sample across the primary axis.

    The hook keeps no per-frame state: axis pixel bounds change on resize and
    zoom, so geometry is read from the frame on every pass.
    """

    def __init__(self, config: CrosshairConfig = CrosshairConfig()) -> None:
        self.config = config

    def before_draw(self, frame: RenderFrame) -> None:
        """Draw the indicator for the first active point, if any.

        All series share one x position per sample index, so the first active
        point fixes the line exactly.
        """

        if not frame.active_points:
            return
        axis = frame.scales.get(str(self.config.axis_id))
        if axis is None:
            return

        x = frame.active_points[0].x
        ctx = frame.ctx
        ctx.save()
        ctx.begin_path()
        ctx.move_to(x, axis.top)
        ctx.line_to(x, axis.bottom)
        ctx.line_width = self.config.line_width
        ctx.stroke_style = self.config.color
        ctx.stroke()
        ctx.restore()


def mount_chart(config: ChartConfig, *, renderer: Renderer) -> MountedChart:
    """Mount a chart with its crosshair overlay as the only render hook."""

    return MountedChart(config, renderer=renderer, hooks=(CrosshairOverlay(config.crosshair),))
