"""
Memory Management Simulator — Allocation, Paging & Page Replacement

This application provides an interactive front end for the simulation
engines of this project:
    - Contiguous allocation (First, Best, Worst and Next Fit)
    - Page replacement (FIFO, LRU, Optimal)
    - Paging with logical to physical address translation

All algorithmic work happens in engine.py, replacement.py and paging.py.
This script only collects input, calls the engines and draws their results
with Streamlit and Plotly.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st

import config
from charts import allocation_figure, frames_figure, hits_faults_figure, policy_comparison_figure
from engine import ALGORITHMS, compare_results, run_all
from paging import (
    PagingError,
    allocate_process,
    deallocate_process,
    initialize,
    session_stats,
    translate_address,
)
from replacement import POLICIES, compare_policies, simulate
from utils import get_color, parse_int_list, process_label


# Configure the Streamlit page
st.set_page_config(page_title="Memory Management Simulator", layout="wide")

VIEWS = ["Compare All", "Custom Comparison", "Page Replacement", "Paging"]

# -----------------------------------------------------------------------------
# SESSION STATE
# -----------------------------------------------------------------------------

# Event log survives Streamlit reruns
if "event_log" not in st.session_state:
    st.session_state.event_log = []

# Paging session: None until memory is initialized
if "paging" not in st.session_state:
    st.session_state.paging = None

if "translation" not in st.session_state:
    st.session_state.translation = None


def log_event(message: str) -> None:
    st.session_state.event_log.append(message)


# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

view = st.sidebar.radio("Choose View", VIEWS)

st.title("Memory Management Simulator")


# =============================================================================
# SHARED RENDERING HELPERS
# =============================================================================

def read_allocation_inputs(prefix: str):
    """Sidebar inputs for blocks and processes, parsed into positive integers."""
    st.sidebar.header("Memory Layout")
    blocks_text = st.sidebar.text_input(
        "Memory blocks (KB, comma separated)",
        value=",".join(map(str, config.DEFAULT_BLOCKS)),
        key=f"{prefix}_blocks",
    )
    processes_text = st.sidebar.text_input(
        "Process sizes (KB, comma separated)",
        value=",".join(map(str, config.DEFAULT_PROCESSES)),
        key=f"{prefix}_processes",
    )
    return (
        parse_int_list(blocks_text, positive_only=True),
        parse_int_list(processes_text, positive_only=True),
    )


def render_allocation_result(name, result, blocks, processes, is_best):
    """Metrics card plus per-process assignment table for one strategy."""
    st.subheader(f"{name} ★ Best" if is_best else name)

    st.metric("Allocated", f"{result.allocated_count}/{len(processes)}")
    st.metric("Utilization", f"{result.utilization:.1f}%")
    st.caption(f"Total wastage: {result.total_wastage} KB · "
               f"Unallocated: {result.unallocated_count}")

    rows = []
    for i, size in enumerate(processes):
        block = result.allocation[i]
        rows.append({
            "process": process_label(i),
            "size_kb": size,
            "block": "Not allocated" if block is None else f"Block {block + 1}",
        })
    st.table(rows)

    st.plotly_chart(allocation_figure(blocks, processes, result, title=name))


def render_comparison(results, blocks, processes):
    best = compare_results(*(results.get(name) for name in ALGORITHMS))
    if best is not None:
        st.success(f"Best algorithm for this input: {best}")

    columns = st.columns(max(len(results), 1))
    for col, (name, result) in zip(columns, results.items()):
        with col:
            render_allocation_result(name, result, blocks, processes, name == best)


# =============================================================================
# COMPARE ALL VIEW
# =============================================================================

if view == "Compare All":
    st.header("Compare All Algorithms")
    st.write("Compare First Fit, Best Fit, Worst Fit and Next Fit side by side.")

    blocks, processes = read_allocation_inputs("all")

    if not blocks or not processes:
        st.warning("Enter at least one memory block and one process")
    else:
        results = run_all(blocks, processes)
        render_comparison(results, blocks, processes)


# =============================================================================
# CUSTOM COMPARISON VIEW
# =============================================================================

elif view == "Custom Comparison":
    st.header("Custom Algorithm Selection")
    st.write("Choose which algorithms to compare.")

    blocks, processes = read_allocation_inputs("custom")
    selected = st.sidebar.multiselect(
        "Algorithms",
        options=list(ALGORITHMS),
        default=list(ALGORITHMS)[:2],
        key="custom_algorithms",
    )

    if not selected:
        st.warning("Select at least one algorithm")
    elif not blocks or not processes:
        st.warning("Enter at least one memory block and one process")
    else:
        results = run_all(blocks, processes, selected)
        render_comparison(results, blocks, processes)


# =============================================================================
# PAGE REPLACEMENT VIEW
# =============================================================================

elif view == "Page Replacement":
    st.header("Page Replacement Algorithms")

    st.sidebar.header("Reference String")
    frame_count = st.sidebar.number_input(
        "Number of frames",
        min_value=1,
        max_value=config.MAX_FRAME_COUNT,
        value=config.DEFAULT_FRAME_COUNT,
        step=1,
    )
    reference_text = st.sidebar.text_input(
        "Page reference string (comma separated)",
        value=config.DEFAULT_REFERENCE_STRING,
    )
    policy = st.sidebar.selectbox("Replacement Policy", options=list(POLICIES))

    pages = parse_int_list(reference_text)

    if not pages:
        st.warning("Please enter valid page numbers")
    else:
        result = simulate(policy, pages, int(frame_count))

        m1, m2, m3 = st.columns(3)
        m1.metric("Page Faults", result.page_faults)
        m2.metric("Page Hits", result.page_hits)
        m3.metric("Hit Rate", f"{result.hit_rate:.1f}%")

        # ----- Step by step trace -----
        st.subheader("Step-by-Step Execution")
        rows = []
        for step in result.steps:
            row = {"step": step.step, "page": step.page}
            for slot in range(int(frame_count)):
                row[f"frame {slot + 1}"] = str(step.frames[slot]) if slot < len(step.frames) else ""
            row["result"] = "Fault" if step.fault else "Hit"
            rows.append(row)
        st.table(rows)

        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(hits_faults_figure(result, title=f"{policy}: Hits vs Faults"))
        with col2:
            st.plotly_chart(policy_comparison_figure(compare_policies(pages, int(frame_count))))


# =============================================================================
# PAGING VIEW
# =============================================================================

elif view == "Paging":
    st.header("Paging Simulation")

    # ----- Memory configuration -----
    st.sidebar.header("Memory Configuration")
    total_memory = st.sidebar.number_input(
        "Total memory (KB)", min_value=1, value=config.DEFAULT_TOTAL_MEMORY, step=1
    )
    frame_size = st.sidebar.number_input(
        "Frame size (KB)", min_value=1, value=config.DEFAULT_FRAME_SIZE, step=1
    )

    if st.sidebar.button("Initialize Memory", key="init_memory"):
        st.session_state.paging = initialize(int(total_memory), int(frame_size))
        st.session_state.translation = None
        log_event(f"Memory initialized: {st.session_state.paging.frame_count} frames created")
        st.sidebar.success(f"{st.session_state.paging.frame_count} frames created")

    if st.sidebar.button("Reset All", key="reset_memory"):
        st.session_state.paging = None
        st.session_state.translation = None
        log_event("Reset complete: all memory cleared")
        st.sidebar.success("All memory cleared")

    session = st.session_state.paging

    if session is None:
        st.info("Initialize memory from the sidebar to start")
    else:
        # ----- Process allocation -----
        st.subheader("Allocate Process")
        a1, a2, a3 = st.columns([2, 2, 1])
        name = a1.text_input("Process name", placeholder="e.g., P1", key="proc_name")
        size = a2.number_input("Process size (KB)", min_value=0, value=0, step=1, key="proc_size")

        if a3.button("Allocate Process", key="allocate"):
            if not name.strip():
                st.error("Please enter a process name")
            elif size <= 0:
                st.error("Process size must be greater than 0")
            else:
                try:
                    session = allocate_process(
                        session, name.strip(), int(size), palette_size=len(config.PROCESS_COLORS)
                    )
                    st.session_state.paging = session
                    allocated = session.find_process(name.strip())
                    log_event(f"{allocated.name} allocated with {allocated.page_count} pages")
                    st.success(f"{allocated.name} allocated with {allocated.page_count} pages")
                except PagingError as e:
                    st.error(str(e))

        # ----- Stats -----
        stats = session_stats(session)
        s1, s2, s3, s4 = st.columns(4)
        s1.metric("Total Frames", stats["total_frames"])
        s2.metric("Frames Used", stats["used_frames"])
        s3.metric("Free Frames", stats["free_frames"])
        s4.metric("Memory Utilization", f"{stats['utilization']:.1f}%")

        col1, col2 = st.columns(2)

        # ----- Physical frames -----
        with col1:
            st.subheader("Physical Memory (Frames)")
            st.plotly_chart(frames_figure(session))

        # ----- Page tables -----
        with col2:
            st.subheader("Page Tables")
            if not session.processes:
                st.write("No processes allocated yet")
            for process in session.processes:
                st.markdown(
                    f"<span style='color:{get_color(process.color)}'>■</span> "
                    f"**{process.name}** ({process.size} KB)",
                    unsafe_allow_html=True,
                )
                st.table([{"page": e.page, "frame": e.frame} for e in process.page_table])
                if st.button(f"Deallocate {process.name}", key=f"dealloc_{process.name}"):
                    st.session_state.paging = deallocate_process(session, process.name)
                    st.session_state.translation = None
                    log_event(f"{process.name} removed from memory")
                    st.rerun()

        # ----- Address translation -----
        if session.processes:
            st.subheader("Logical to Physical Address Translation")
            t1, t2 = st.columns([3, 1])
            address = t1.number_input("Logical address", min_value=0, value=0, step=1, key="logical")
            if t2.button("Translate", key="translate"):
                try:
                    st.session_state.translation = translate_address(session, int(address))
                except PagingError as e:
                    st.session_state.translation = None
                    st.error(str(e))

            tr = st.session_state.translation
            if tr is not None:
                st.table([{
                    "process": tr.process,
                    "logical": tr.logical,
                    "page": tr.page,
                    "offset": tr.offset,
                    "frame": tr.frame,
                    "physical": tr.physical,
                }])
                st.caption(
                    f"Physical Address = (Frame × Frame Size) + Offset = "
                    f"({tr.frame} × {session.frame_size}) + {tr.offset} = {tr.physical}"
                )


# -----------------------------------------------------------------------------
# EVENT LOG (most recent first)
# -----------------------------------------------------------------------------

st.sidebar.markdown("---")
st.sidebar.header("Event Log")
for ev in st.session_state.event_log[-config.EVENT_LOG_LIMIT:][::-1]:
    st.sidebar.write(ev)
