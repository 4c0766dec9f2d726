from __future__ import annotations
import logging
from typing import List, Tuple
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from matplotlib.transforms import IdentityTransform
import plotly.graph_objects as go

from dopers.config import MARKER_CONFIG
from dopers.view import ScatterView, Marker, tooltip_lines

logger = logging.getLogger(__name__)

TITLE = "Dopers Amongst Bikers Scatterplot"
SUBTITLE = "35 Fastest times up Alpe d'Huez"
LEGEND_LABELS = {
    True: "Riders with doping allegations",
    False: "No doping allegations",
}
X_TITLE = "Year"
Y_TITLE = "Best Time (minutes)"


def _require_ready(view: ScatterView) -> None:
    if not view.ready or view.scales is None:
        raise RuntimeError(f"view is not ready to draw (status={view.status.value})")


def axis_ticks(view: ScatterView) -> Tuple[List[Tuple[float, str]], List[Tuple[float, str]]]:
    """(pixel, label) pairs for the x and y axes."""
    _require_ready(view)
    sc = view.scales
    xt = [(sc.x(t), sc.x.tick_format(t)) for t in sc.x.ticks()]
    yt = [(sc.y(t), sc.y.tick_format(t)) for t in sc.y.ticks()]
    return xt, yt


# -----------------------------
# Matplotlib (static)
# -----------------------------

def scatter_figure(view: ScatterView, dpi: int = 100):
    """Draw the loaded view on a Matplotlib figure laid out in canvas pixels."""
    _require_ready(view)
    layout = view.layout
    x0, x1 = layout.x_range
    y_bottom, y_top = layout.y_range

    fig = plt.figure(figsize=(layout.width / dpi, layout.height / dpi), dpi=dpi)
    ax = fig.add_axes([
        layout.margin.left / layout.width,
        layout.margin.bottom / layout.height,
        (x1 - x0) / layout.width,
        (y_bottom - y_top) / layout.height,
    ])
    ax.set_xlim(x0, x1)
    ax.set_ylim(y_bottom, y_top)

    markers = view.marker_positions()
    logger.debug("Drawing %d markers (matplotlib)", len(markers))
    radius_pt = MARKER_CONFIG["radius"] * 72 / dpi
    coll = ax.scatter(
        [m.x for m in markers], [m.y for m in markers],
        s=(2 * radius_pt) ** 2,
        c=[m.color for m in markers],
        edgecolors="black", linewidths=0.5, zorder=3,
    )

    xt, yt = axis_ticks(view)
    ax.set_xticks([p for p, _ in xt])
    ax.set_xticklabels([lbl for _, lbl in xt])
    ax.set_yticks([p for p, _ in yt])
    ax.set_yticklabels([lbl for _, lbl in yt])
    ax.set_xlabel(X_TITLE)
    ax.set_ylabel(Y_TITLE)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)

    color = view.scales.color
    handles = [Patch(color=color(flag), label=LEGEND_LABELS[flag]) for flag in (True, False)]
    ax.legend(handles=handles, loc="upper right", frameon=False, fontsize=9)

    fig.suptitle(TITLE, fontsize=14, weight="bold")
    fig.text(0.5, 0.9, SUBTITLE, ha="center", fontsize=10)
    return fig, ax, coll


def connect_hover(fig, ax, coll, view: ScatterView):
    """
    Drive the view's hover state from Matplotlib pointer events and show the
    tooltip next to the cursor. Returns the callback id.
    """
    markers = view.marker_positions()
    height_px = fig.get_figheight() * fig.dpi
    annot = fig.text(
        0, 0, "", fontsize=8, va="top", ha="left",
        bbox={"boxstyle": "round", "fc": "w", "alpha": 0.9},
        transform=IdentityTransform(),
    )
    annot.set_visible(False)

    def _update(event):
        hit = False
        if event.inaxes == ax:
            hit, ind = coll.contains(event)
        if hit:
            m: Marker = markers[ind["ind"][0]]
            if view.selected is not m.point:
                # browser-style coordinates: origin top-left
                view.hover_enter(m.point, event.x, height_px - event.y)
                tx, ty = view.tooltip_pos
                annot.set_position((tx, height_px - ty))
                annot.set_text("\n".join(view.tooltip_lines()))
                annot.set_visible(True)
                fig.canvas.draw_idle()
        elif view.hovering:
            view.hover_leave()
            annot.set_visible(False)
            fig.canvas.draw_idle()

    return fig.canvas.mpl_connect("motion_notify_event", _update)


# -----------------------------
# Plotly (interactive)
# -----------------------------

def scatter_figure_plotly(view: ScatterView) -> go.Figure:
    _require_ready(view)
    layout = view.layout
    color = view.scales.color
    markers = view.marker_positions()
    logger.debug("Drawing %d markers (plotly)", len(markers))

    fig = go.Figure()
    for flag in (True, False):
        group = [m for m in markers if m.point.doped == flag]
        fig.add_trace(
            go.Scatter(
                x=[m.x for m in group],
                y=[m.y for m in group],
                mode="markers",
                name=LEGEND_LABELS[flag],
                marker=dict(
                    size=2 * MARKER_CONFIG["radius"],
                    color=color(flag),
                    line=dict(color="black", width=0.5),
                ),
                customdata=[[m.point.Year, m.point.Time.total_seconds()] for m in group],
                hovertext=["<br>".join(tooltip_lines(m.point)) for m in group],
                hoverinfo="text",
            )
        )

    xt, yt = axis_ticks(view)
    x0, x1 = layout.x_range
    y_bottom, y_top = layout.y_range
    fig.update_xaxes(
        range=[x0, x1], tickmode="array",
        tickvals=[p for p, _ in xt], ticktext=[lbl for _, lbl in xt],
        title=X_TITLE, showgrid=False, zeroline=False,
    )
    # reversed range: fastest (smallest pixel) at the top
    fig.update_yaxes(
        range=[y_bottom, y_top], tickmode="array",
        tickvals=[p for p, _ in yt], ticktext=[lbl for _, lbl in yt],
        title=Y_TITLE, showgrid=False, zeroline=False,
    )
    fig.update_layout(
        title=f"{TITLE}<br><sup>{SUBTITLE}</sup>",
        template="plotly_white",
        width=layout.width,
        height=layout.height,
        margin=dict(l=layout.margin.left, r=layout.margin.right,
                    t=layout.margin.top, b=layout.margin.bottom),
        legend=dict(x=1, y=1, xanchor="right", yanchor="top"),
        hoverlabel=dict(align="left"),
    )
    return fig
