# replacement.py
"""
Page replacement engine.

Runs a fully known page reference string through a fixed number of frames
and records, for every reference, whether it hit or faulted and what the
frames held afterwards.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

logger = logging.getLogger(__name__)


class ReplacementPolicy:
    """
    Names of the available page replacement algorithms.

    FIFO:    replaces the page that entered memory earliest
    LRU:     replaces the page not referenced for the longest time
    OPTIMAL: replaces the page whose next reference is furthest in the future
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"


@dataclass
class ReplacementStep:
    """
    One serviced page reference.

    Attributes:
        step (int): 1-based position in the reference string
        page (int): The page that was referenced
        frames (List[int]): Frame contents after servicing, in slot order
        fault (bool): True on a page fault, False on a hit
    """
    step: int
    page: int
    frames: List[int]
    fault: bool


@dataclass
class ReplacementResult:
    page_faults: int = 0
    page_hits: int = 0
    steps: List[ReplacementStep] = field(default_factory=list)

    @property
    def total_references(self) -> int:
        return self.page_faults + self.page_hits

    @property
    def hit_rate(self) -> float:
        total = self.total_references
        return (self.page_hits / total * 100) if total > 0 else 0.0

    @property
    def fault_rate(self) -> float:
        total = self.total_references
        return (self.page_faults / total * 100) if total > 0 else 0.0


def _record(result: ReplacementResult, index: int, page: int, frames, fault: bool) -> None:
    if fault:
        result.page_faults += 1
    else:
        result.page_hits += 1
    result.steps.append(ReplacementStep(index + 1, page, list(frames), fault))


# =============================================================================
# ALGORITHMS
# =============================================================================

def fifo(pages: Sequence[int], frame_capacity: int) -> ReplacementResult:
    """
    First-In-First-Out replacement.

    Frames form a queue ordered by load time. A hit leaves the queue alone;
    a fault on full memory drops the head and appends the new page.
    """
    queue: deque = deque()
    result = ReplacementResult()

    for i, page in enumerate(pages):
        fault = page not in queue
        if fault:
            if len(queue) >= frame_capacity:
                queue.popleft()
            queue.append(page)
        _record(result, i, page, queue, fault)

    return result


def lru(pages: Sequence[int], frame_capacity: int) -> ReplacementResult:
    """
    Least-Recently-Used replacement.

    The new page takes over the slot of the resident page with the oldest
    last reference.
    """
    frames: List[int] = []
    last_used: Dict[int, int] = {}
    result = ReplacementResult()

    for i, page in enumerate(pages):
        fault = page not in frames
        if fault:
            if len(frames) < frame_capacity:
                frames.append(page)
            else:
                victim = min(frames, key=lambda p: last_used[p])
                frames[frames.index(victim)] = page
                del last_used[victim]
        last_used[page] = i
        _record(result, i, page, frames, fault)

    return result


def optimal(pages: Sequence[int], frame_capacity: int) -> ReplacementResult:
    """
    Belady's optimal replacement.

    Needs the whole reference string up front. Pages that never appear again
    are evicted first; otherwise the page used furthest in the future goes.
    Ties are broken by slot order.
    """
    frames: List[int] = []
    result = ReplacementResult()

    for i, page in enumerate(pages):
        fault = page not in frames
        if fault:
            if len(frames) < frame_capacity:
                frames.append(page)
            else:
                frames[_furthest_slot(frames, pages, i + 1)] = page
        _record(result, i, page, frames, fault)

    return result


def _furthest_slot(frames: List[int], pages: Sequence[int], start: int) -> int:
    future = list(pages[start:])
    victim_slot = 0
    victim_distance = -1.0

    for slot, resident in enumerate(frames):
        try:
            distance = float(future.index(resident))
        except ValueError:
            distance = float('inf')
        if distance > victim_distance:
            victim_distance = distance
            victim_slot = slot
            if distance == float('inf'):
                break

    return victim_slot


POLICIES: Dict[str, Callable[[Sequence[int], int], ReplacementResult]] = {
    ReplacementPolicy.FIFO: fifo,
    ReplacementPolicy.LRU: lru,
    ReplacementPolicy.OPTIMAL: optimal,
}


def simulate(policy: str, pages: Sequence[int], frame_capacity: int) -> ReplacementResult:
    """
    Run the named policy over a reference string.

    Raises:
        ValueError: If the policy is unknown or frame_capacity is below 1
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown replacement policy: {policy}")
    if frame_capacity < 1:
        raise ValueError("Number of frames must be at least 1")

    result = POLICIES[policy](pages, frame_capacity)
    logger.debug("%s over %d references with %d frames: %d faults, %d hits",
                 policy, len(pages), frame_capacity, result.page_faults, result.page_hits)
    return result


def compare_policies(pages: Sequence[int], frame_capacity: int) -> Dict[str, ReplacementResult]:
    return {name: simulate(name, pages, frame_capacity) for name in POLICIES}
