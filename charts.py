# charts.py
"""
Plotly figures for the Streamlit views.

Builders only read engine results; they never run an algorithm themselves.
"""

from typing import Dict, List, Sequence

import plotly.graph_objects as go

from config import FREE_COLOR
from engine import AllocationResult, block_usage
from paging import MemorySession
from replacement import ReplacementResult
from utils import get_color, process_label


def allocation_figure(blocks: Sequence[int], processes: Sequence[int],
                      result: AllocationResult, title: str = "") -> go.Figure:
    """
    Stacked horizontal bars, one row per block.

    Each allocated process is a segment in its block, followed by the block's
    unused remainder.
    """
    usage = block_usage(blocks, processes, result)
    rows = [f"Block {u.index + 1} ({u.size} KB)" for u in usage]

    fig = go.Figure()
    for u, row in zip(usage, rows):
        for proc_index in u.processes:
            fig.add_trace(go.Bar(
                x=[processes[proc_index]],
                y=[row],
                orientation='h',
                name=process_label(proc_index),
                text=process_label(proc_index),
                marker_color=get_color(proc_index),
                hovertext=f"{process_label(proc_index)}: {processes[proc_index]} KB",
                hoverinfo='text',
                showlegend=False,
            ))

    # Free remainder of every block in a single trace
    fig.add_trace(go.Bar(
        x=[u.free for u in usage],
        y=rows,
        orientation='h',
        name="Free",
        marker_color=FREE_COLOR,
        hovertext=[f"Free: {u.free} KB ({u.used_percentage:.0f}% used)" for u in usage],
        hoverinfo='text',
        showlegend=False,
    ))

    fig.update_layout(
        title=title,
        barmode='stack',
        height=60 + 40 * max(len(rows), 1),
        yaxis=dict(autorange='reversed'),
        margin=dict(l=10, r=10, t=40, b=10),
    )
    return fig


def frames_figure(session: MemorySession) -> go.Figure:
    """Frame table as a row of equal bars, colored by owning process."""
    colors_by_process: Dict[str, int] = {p.name: p.color for p in session.processes}

    x: List[int] = []
    text: List[str] = []
    colors: List[str] = []
    for frame_no, tag in enumerate(session.frames):
        x.append(frame_no)
        if tag is None:
            text.append(f"F{frame_no}: Free")
            colors.append(FREE_COLOR)
        else:
            text.append(f"F{frame_no}: {tag.process} - Page {tag.page}")
            colors.append(get_color(colors_by_process.get(tag.process)))

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x,
        y=[1] * len(x),
        text=text,
        marker_color=colors,
        hovertext=text,
        hoverinfo='text',
    ))
    fig.update_layout(
        height=200,
        showlegend=False,
        yaxis=dict(showticklabels=False),
    )
    return fig


def hits_faults_figure(result: ReplacementResult, title: str = "Hits vs Faults") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Hits", "Faults"],
        y=[result.page_hits, result.page_faults],
        marker_color=["lightgreen", "salmon"],
    ))
    fig.update_layout(height=300, title=title)
    return fig


def policy_comparison_figure(results: Dict[str, ReplacementResult]) -> go.Figure:
    """Grouped fault/hit bars for several policies run on the same input."""
    names = list(results)
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Faults", x=names, y=[r.page_faults for r in results.values()]))
    fig.add_trace(go.Bar(name="Hits", x=names, y=[r.page_hits for r in results.values()]))
    fig.update_layout(barmode='group', height=300, title="Policy Comparison")
    return fig
